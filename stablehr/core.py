"""Deferred acceptance implementation"""

import numba as nb
import numpy as np
import time

__all__ = ["deferred_acceptance", "PreferenceListExhausted",
           "UnlistedHospitalError", "UNLISTED_POLICIES"]

UNLISTED_POLICIES = {"last": 0, "unacceptable": 1, "error": 2}

# status codes reported by the kernel in info[1]
_OK, _EXHAUSTED, _UNLISTED = 0, 1, 2


class PreferenceListExhausted(RuntimeError):
  """A hospital ran out of students to propose to with a seat still free."""
  def __init__(self, hospital):
    self.hospital = hospital
    super().__init__(
        "Preference list of hospital {0} exhausted with a free seat: no "
        "stable completion possible under given preferences.".format(hospital))


class UnlistedHospitalError(ValueError):
  """A hospital proposed to a student who never ranked it."""
  def __init__(self, student, hospital):
    self.student = student
    self.hospital = hospital
    super().__init__(
        "Hospital {0} proposed to student {1}, who did not rank it.".format(
            hospital, student))


@nb.njit
def _report(info, steps, status, h, s):
  info[0] = steps
  info[1] = status
  info[2] = h
  info[3] = s


@nb.njit('void(int32[:,:], int32[:], int32[:,:], int32[:], int32[:], '
         'int32[:], int32[:], int64[:], int64, boolean)')
def _propose(hosp_pref, pref_len, ranking, pool, cursor, current, unfilled,
             info, policy, strict):
  """Run proposals until the free-slot pool is empty or an error occurs.

  `pool[:top]` is the free-slot pool, its front being `pool[top - 1]`, so that
  peek, pop and push at the front are all O(1).

  On return `info` holds the number of proposals, a status code, and the
  offending hospital and student.
  """
  unlisted_rank = ranking.shape[1]
  top = len(pool)
  steps = 0
  while top > 0:
    h = pool[top - 1]
    if cursor[h] >= pref_len[h]:
      if strict:
        _report(info, steps, _EXHAUSTED, h, -1)
        return
      top -= 1
      unfilled[h] += 1
      continue
    s = hosp_pref[h, cursor[h]]
    cursor[h] += 1
    steps += 1
    rank = ranking[s, h]
    if rank == unlisted_rank:
      if policy == 2:
        _report(info, steps, _UNLISTED, h, s)
        return
      if policy == 1:
        continue
    held = current[s]
    if held < 0:
      current[s] = h
      top -= 1
    elif rank < ranking[s, held]:
      # h takes the seat, the displaced slot proposes next
      current[s] = h
      pool[top - 1] = held
  _report(info, steps, _OK, -1, -1)


def initial_pool(hospital_cap):
  """Free-slot pool holding `hospital_cap[h]` copies of each hospital h.

  Slots are pushed to the front hospital by hospital, so the last hospital
  with a seat is at the front.
  """
  return np.repeat(np.arange(len(hospital_cap), dtype=np.int32),
                   np.asarray(hospital_cap, dtype=np.int64))


def deferred_acceptance(hospital_pref, pref_len, ranking, hospital_cap,
                        unlisted="last", strict=False, verbose=False):
  """Hospital-proposing deferred acceptance.

  Each free hospital seat proposes to the next student on its hospital's list;
  a student holds the best offer so far and releases the seat it held before.
  The result is the hospital-optimal stable matching.

  Args:
    hospital_pref: (m, L) integer array of hospital preference lists, padded.
    pref_len: (m,) integer array of hospital preference list lengths.
    ranking: (n, m) integer array of positions of hospitals in student lists,
      with `m` marking a hospital the student did not list.
    hospital_cap: length m sequence of hospital capacities.
    unlisted: "last", "unacceptable" or "error"; how a student treats a
      proposal from a hospital they did not list.
    strict: raise `PreferenceListExhausted` instead of leaving a seat empty
      when a hospital runs out of students.
    verbose: print a summary of the run.

  Returns:
    current: (n,) int32 array, hospital of each student or -1.
    cursor: (m,) int32 array, number of proposals made by each hospital.
    unfilled: (m,) int32 array, number of seats left empty in each hospital.
    num_proposals: total number of proposals.
  """
  if unlisted not in UNLISTED_POLICIES:
    raise ValueError("Unknown unlisted policy {0!r}.".format(unlisted))
  hospital_pref = np.ascontiguousarray(hospital_pref, dtype=np.int32)
  pref_len = np.ascontiguousarray(pref_len, dtype=np.int32)
  ranking = np.ascontiguousarray(ranking, dtype=np.int32)
  num_hospital, num_student = len(pref_len), ranking.shape[0]
  if not hospital_pref.shape[0] == num_hospital == len(hospital_cap):
    raise ValueError("Hospital dimension mismatch.")
  if not ranking.shape[1] == num_hospital:
    raise ValueError("Ranking dimension mismatch.")
  hospital_cap = np.asarray(hospital_cap, dtype=np.int64)
  if np.any(hospital_cap < 0):
    raise ValueError("Negative hospital capacity.")
  if np.any(pref_len < 0) or np.any(pref_len > hospital_pref.shape[1]):
    raise ValueError("Preference list length out of range.")
  listed = np.arange(hospital_pref.shape[1]) < pref_len[:, np.newaxis]
  students = hospital_pref[listed]
  if np.any(students < 0) or np.any(students >= num_student):
    raise ValueError("Student index out of range.")
  if np.any(ranking < 0) or np.any(ranking > num_hospital):
    raise ValueError("Rank out of range.")

  pool = initial_pool(hospital_cap)
  cursor = np.zeros(num_hospital, dtype=np.int32)
  current = np.full(num_student, -1, dtype=np.int32)
  unfilled = np.zeros(num_hospital, dtype=np.int32)
  info = np.zeros(4, dtype=np.int64)

  start_time = time.time()
  _propose(hospital_pref, pref_len, ranking, pool, cursor, current, unfilled,
           info, UNLISTED_POLICIES[unlisted], bool(strict))
  end_time = time.time()
  num_proposals, status = int(info[0]), int(info[1])
  if verbose:
    print("Made {0} proposals in {1:.3f}s.".format(
        num_proposals, end_time - start_time))

  if status == _EXHAUSTED:
    raise PreferenceListExhausted(hospital=int(info[2]))
  if status == _UNLISTED:
    raise UnlistedHospitalError(student=int(info[3]), hospital=int(info[2]))
  return current, cursor, unfilled, num_proposals
