"""Matching checkers."""

import numpy as np


def _acceptable(ins, s, h, unlisted):
  """True if student s would hold an offer from hospital h."""
  return unlisted == "last" or ins.store.is_listed(s, h)


def _allocation_positions(ins, student_match, h):
  """Sorted positions in the list of hospital h of the students it holds."""
  return [i for i, s in enumerate(ins.hospital_pref_list[h])
          if student_match[s] == h]


def check_valid(ins, student_match, unlisted="last"):
  """Check if an assignment is a matching of an instance.

  Every student is assigned to at most one hospital that lists the student
  and that the student accepts, and no hospital holds more students than its
  capacity.

  Args:
    ins: a `HRInstance` object.
    student_match: length n sequence of hospital indices, -1 for unmatched.
    unlisted: policy of students towards hospitals they did not list.

  Returns:
    True if `student_match` is a matching of `ins`.
  """
  student_match = np.asarray(student_match)
  if student_match.shape != (ins.num_student,):
    return False
  if np.any(student_match < -1) or np.any(student_match >= ins.num_hospital):
    return False
  for s, h in enumerate(student_match):
    if h < 0:
      continue
    if s not in ins.hospital_pref_list[h] or not _acceptable(ins, s, h, unlisted):
      return False
  counts = np.bincount(student_match[student_match >= 0],
                       minlength=ins.num_hospital)
  return bool(np.all(counts <= np.array(ins.hospital_cap, dtype=np.int64)))


def blocking_pairs(ins, student_match, unlisted="last"):
  """Find the blocking pairs of a matching.

  A pair (h, s) blocks if h lists s, s accepts h and prefers it to their
  current hospital (or is unmatched), and h has a free seat or prefers s to
  one of its students.

  Returns:
    list of (hospital, student) tuples.
  """
  student_match = np.asarray(student_match)
  ranking = ins.store.ranking
  pairs = []
  for h in range(ins.num_hospital):
    held = _allocation_positions(ins, student_match, h)
    is_full = len(held) >= ins.hospital_cap[h]
    worst = held[-1] if held else -1
    for i, s in enumerate(ins.hospital_pref_list[h]):
      if is_full and i > worst:
        break
      cur = student_match[s]
      if cur == h or not _acceptable(ins, s, h, unlisted):
        continue
      if cur < 0 or ranking[s, h] < ranking[s, cur]:
        pairs.append((h, s))
  return pairs


def check_stable(ins, student_match, unlisted="last"):
  """Check if a matching has no blocking pair."""
  return not blocking_pairs(ins, student_match, unlisted)


def all_stable_matchings(ins, unlisted="last"):
  """Enumerate all stable matchings by brute force.

  Only meant for small instances: every assignment of students to
  hospitals that list them is tried.

  Returns:
    list of lists, each one hospital index (or -1) per student.
  """
  options = [[-1] + [h for h in range(ins.num_hospital)
                     if s in ins.hospital_pref_list[h]
                     and _acceptable(ins, s, h, unlisted)]
             for s in range(ins.num_student)]
  seats = list(ins.hospital_cap)
  match = [-1] * ins.num_student
  found = []

  def extend(s):
    if s == ins.num_student:
      if check_stable(ins, match, unlisted):
        found.append(list(match))
      return
    for h in options[s]:
      if h >= 0:
        if seats[h] == 0:
          continue
        seats[h] -= 1
      match[s] = h
      extend(s + 1)
      if h >= 0:
        seats[h] += 1
    match[s] = -1

  extend(0)
  return found


def _at_least_as_good(a, b):
  """Compare two allocations of a hospital given as sorted positions."""
  return len(a) >= len(b) and all(x <= y for x, y in zip(a, b))


def check_hospital_optimal(ins, student_match, unlisted="last"):
  """Check if a stable matching is weakly the best for every hospital.

  Compares the matching against every stable matching found by
  `all_stable_matchings`, so only meant for small instances.
  """
  if not check_stable(ins, student_match, unlisted):
    return False
  mine = [_allocation_positions(ins, student_match, h)
          for h in range(ins.num_hospital)]
  for other in all_stable_matchings(ins, unlisted):
    for h in range(ins.num_hospital):
      if not _at_least_as_good(mine[h], _allocation_positions(ins, other, h)):
        return False
  return True
