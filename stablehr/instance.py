"""Hospital/student matching instances and solutions.

Create a hospitals/residents instance and solve it with hospital-proposing
deferred acceptance.
"""

import numpy as np

import stablehr.core
from stablehr.core import PreferenceListExhausted, UnlistedHospitalError

__all__ = [
    "HRInstance", "HRSolution", "PreferenceStore", "solve",
    "MalformedInputError", "PreferenceListExhausted", "UnlistedHospitalError",
    "UNMATCHED"
]

UNMATCHED = -1


class MalformedInputError(ValueError):
  """Preference lists or capacities do not describe a valid instance."""


def _is_int(x):
  return isinstance(x, (int, np.integer)) and not isinstance(x, bool)


def _check_unique(li, what, idx):
  if len(li) != len(set(li)):
    raise MalformedInputError(
        "Preference list of {0} {1} has repeated entries.".format(what, idx))


def _sanity_check(num_hospital, num_student, hospital_pref_list,
                  student_pref_list, hospital_cap):
  """Sanity check for construction of instances."""
  if len(hospital_pref_list) != num_hospital:
    raise MalformedInputError(
        "Got {0} hospital preference lists for {1} hospitals.".format(
            len(hospital_pref_list), num_hospital))
  for h, cap in enumerate(hospital_cap):
    if not _is_int(cap):
      raise MalformedInputError(
          "Capacity of hospital {0} is not an integer.".format(h))
    if cap < 0:
      raise MalformedInputError(
          "Capacity of hospital {0} is negative.".format(h))

  for h, li in enumerate(hospital_pref_list):
    for s in li:
      if not _is_int(s):
        raise MalformedInputError(
            "Hospital {0} ranks a student id {1!r} that is not an integer."
            .format(h, s))
      if not 0 <= s < num_student:
        raise MalformedInputError(
            "Hospital {0} ranks unknown student {1}.".format(h, s))
    _check_unique(li, "hospital", h)

  for s, li in enumerate(student_pref_list):
    for h in li:
      if not _is_int(h):
        raise MalformedInputError(
            "Student {0} ranks a hospital id {1!r} that is not an integer."
            .format(s, h))
      if not 0 <= h < num_hospital:
        raise MalformedInputError(
            "Student {0} ranks unknown hospital {1}.".format(s, h))
    _check_unique(li, "student", s)


class PreferenceStore():
  """Dense preference tables with constant time lookups.

  Attributes:
    hospital_pref: (m, L) int32 array, `hospital_pref[h, i]` is the i-th most
      prefered student of hospital h. Rows are padded with -1 past the end of
      each list.
    pref_len: (m,) int32 array of hospital preference list lengths.
    ranking: (n, m) int32 array, `ranking[s, h]` is the 0-based position of
      hospital h in the list of student s, or `m` if s did not list h.
  """
  def __init__(self, num_hospital, num_student, hospital_pref_list,
               student_pref_list):
    self.num_hospital = num_hospital
    self.num_student = num_student
    self.unlisted = num_hospital
    self.pref_len = np.array([len(li) for li in hospital_pref_list],
                             dtype=np.int32)
    width = int(self.pref_len.max()) if num_hospital > 0 else 0
    self.hospital_pref = np.full((num_hospital, width), -1, dtype=np.int32)
    for h, li in enumerate(hospital_pref_list):
      self.hospital_pref[h, :len(li)] = li
    self.ranking = np.full((num_student, num_hospital), self.unlisted,
                           dtype=np.int32)
    for s, li in enumerate(student_pref_list):
      if li:
        self.ranking[s, li] = np.arange(len(li))

  def preference_of(self, h, i):
    """The i-th most prefered student of hospital h."""
    if not 0 <= i < self.pref_len[h]:
      raise IndexError(
          "Hospital {0} has no preference at position {1}.".format(h, i))
    return int(self.hospital_pref[h, i])

  def rank_of(self, s, h):
    """Position of hospital h in the list of student s, `unlisted` if absent."""
    return int(self.ranking[s, h])

  def is_listed(self, s, h):
    return self.ranking[s, h] < self.unlisted


class HRInstance():
  """Hospitals/residents problem instance.

  An object storing the preferences of hospitals and students, as well as the
  capacity of hospitals.

  Attributes:
    num_hospital: Number of hospitals.
    num_student: Number of students.
    num_slot: Total number of seats, equals `sum(hospital_cap)`.
    hospital_pref_list: `hospital_pref_list[h][j]` is the j-th most prefered
      student of hospital h. Students not in the list are never proposed to.
    student_pref_list: `student_pref_list[s][j]` is the j-th most prefered
      hospital of student s.
    hospital_cap: A list of capacities of hospitals.
    store: A `PreferenceStore` built from the lists above.
  """
  def __init__(self, hospital_pref_list, student_pref_list, hospital_cap):
    """
    Create an instance of the hospitals/residents problem.

    Args:
      hospital_pref_list: list of list of student indices (0-indexed), from
        the most to the least prefered.
      student_pref_list: list of list of hospital indices (0-indexed), from
        the most to the least prefered.
      hospital_cap: a list indicating the number of seats in each hospital.

    Raises:
      MalformedInputError if the lists do not agree with each other.
    """
    self.num_hospital = len(hospital_cap)
    self.num_student = len(student_pref_list)
    _sanity_check(self.num_hospital, self.num_student, hospital_pref_list,
                  student_pref_list, hospital_cap)
    self.hospital_pref_list = [list(li) for li in hospital_pref_list]
    self.student_pref_list = [list(li) for li in student_pref_list]
    self.hospital_cap = [int(c) for c in hospital_cap]
    self.num_slot = sum(self.hospital_cap)
    self.store = PreferenceStore(self.num_hospital, self.num_student,
                                 self.hospital_pref_list,
                                 self.student_pref_list)

  def __repr__(self):
    s = "<HRInstance with {h} hospitals, {s} students, and {k} seats>".format(
        h=self.num_hospital, s=self.num_student, k=self.num_slot
    )
    return s

  def hospital_rank_by_student(self, s, h):
    """Obtains the ranking of hospital h by student s.

    The most prefered hospital is of rank 1, the second is 2, and so on...
    A hospital the student did not list has rank `num_hospital + 1`.
    """
    return self.store.rank_of(s, h) + 1

  def student_rank_by_hospital(self, h, s):
    """Obtains the ranking of student s by hospital h.

    The most prefered student is of rank 1, the second is 2, and so on...
    A student the hospital did not list has rank `len(list) + 1`.
    """
    li = self.hospital_pref_list[h]
    return li.index(s) + 1 if s in li else len(li) + 1


class HRSolution():
  """Outcome of deferred acceptance on an instance.

  One can directly access this object to obtain the matching:
  e.g. for a `HRSolution` sol,
    `sol[(s, h)]` is 1 if student s is matched to hospital h, otherwise 0.
    `sol["s20"]` or `sol.s(20)` is the hospital of the 20-th student, or
      `UNMATCHED`.
    `sol["h0"]` or `sol.h(0)` is the list of students of the 0-th hospital, in
      the hospital's preference order.

  Attributes:
    student_match: (n,) int array, hospital of each student or `UNMATCHED`.
    hospital_allocations: list of lists of students of each hospital.
    act_hospital_cap: (m,) array of number of filled seats in each hospital.
    unfilled: (m,) array of seats dropped after the hospital exhausted its list.
    cursor: (m,) array of number of proposals made by each hospital.
    num_proposals: total number of proposals made.
    is_complete: True if every student is matched.
  """
  def __init__(self, ins, student_match, cursor, unfilled, num_proposals):
    self.student_match = np.array(student_match, dtype=np.int64)
    self.cursor = np.array(cursor, dtype=np.int64)
    self.unfilled = np.array(unfilled, dtype=np.int64)
    self.num_proposals = int(num_proposals)
    self.hospital_allocations = [
        [s for s in ins.hospital_pref_list[h] if self.student_match[s] == h]
        for h in range(ins.num_hospital)]
    self.act_hospital_cap = np.array(
        [len(li) for li in self.hospital_allocations], dtype=np.int64)
    self.is_complete = bool(np.all(self.student_match != UNMATCHED))

  def __repr__(self):
    s = ["<HRSolution of {s} students, {h} hospitals".format(
        s=len(self.student_match), h=len(self.hospital_allocations)
    )]
    s += ["\twith {0} students matched after {1} proposals>".format(
        int(np.sum(self.student_match != UNMATCHED)), self.num_proposals)
    ]
    return "\n".join(s)

  def __len__(self):
    return len(self.student_match)

  def __getitem__(self, s):
    """Get matched hospital/students.

    Args:
      s: either a tuple `(student, hospital)`, or a string indicating a student
         (e.g. "s10") or a hospital (e.g. "h2").

    Returns:
      1 or 0 if `s` is a pair; the hospital index if `s` names a student;
      the list of students if `s` names a hospital.
    """
    if isinstance(s, tuple):
      return int(self.student_match[s[0]] == s[1])
    elif isinstance(s, str):
      if s.startswith("s"):
        return self.get_student_allocation(int(s[1:]))
      elif s.startswith("h"):
        return self.get_hospital_allocation(int(s[1:]))
    raise TypeError("Unrecognized index.")

  def get_student_allocation(self, s):
    return int(self.student_match[s])

  s = get_student_allocation

  def get_hospital_allocation(self, h):
    return list(self.hospital_allocations[h])

  h = get_hospital_allocation

  def to_list(self):
    """Hospital of each student in increasing student order."""
    return self.student_match.tolist()


def solve(ins, unlisted="last", strict=False, verbose=False):
  """Solve an instance with hospital-proposing deferred acceptance.

  Args:
    ins: a `HRInstance` object.
    unlisted: str, optional
      What a student does when proposed to by a hospital they did not list.
      "last" (default): the hospital ranks below every listed one.
      "unacceptable": the proposal is rejected.
      "error": raise `UnlistedHospitalError`.
    strict: bool, optional
      If True, raise `PreferenceListExhausted` when a hospital runs out of
      students with a seat still free. Otherwise the seat stays empty.
    verbose: bool, optional
      If set to True, extra information will be printed when running the
      algorithm. Default is False.

  Returns:
    sol: a `HRSolution` object.
  """
  store = ins.store
  current, cursor, unfilled, num_proposals = stablehr.core.deferred_acceptance(
      hospital_pref=store.hospital_pref,
      pref_len=store.pref_len,
      ranking=store.ranking,
      hospital_cap=ins.hospital_cap,
      unlisted=unlisted,
      strict=strict,
      verbose=verbose
  )
  sol = HRSolution(ins, current, cursor, unfilled, num_proposals)
  if verbose:
    print("Matched {0} of {1} students, {2} seats left empty.".format(
        int(np.sum(sol.student_match != UNMATCHED)), ins.num_student,
        ins.num_slot - int(np.sum(sol.act_hospital_cap))))
  return sol
