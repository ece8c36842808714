"""Random Instance Generators"""

import numpy as np

import stablehr.instance

__all__ = ["gen_random_instance"]


def gen_random_instance(num_hospital, num_student,
                        num_additional_seat=0,
                        hospital_pref_len=0,
                        student_pref_len=0):
  """Generate a uniform random instance.

  Generate a hospitals/residents instance where every preference list is
  chosen uniformly at random.

  Args:
    num_hospital: int
      Number of hospitals.
    num_student: int
      Number of students.
    num_additional_seat: int, optional
      Number of total seats will be number of students plus num_additional_seat,
      provided that each hospital has at least one seat (Otherwise the hospital
      capacity is 1 for every hospital). Default is 0.
    hospital_pref_len: int, optional
      Length of hospital's preference list. Students outside the list are
      never proposed to. Default: generate full preference list.
    student_pref_len: int, optional
      Length of student's preference list. Default: generate full preference
      list.

  Returns:
    A `HRInstance` object.
  """
  hospital_pref_list = np.argsort(
      np.random.rand(num_hospital, num_student)
  ).tolist()
  if hospital_pref_len:
    for h in range(num_hospital):
      hospital_pref_list[h] = hospital_pref_list[h][:hospital_pref_len]
  student_pref_list = np.argsort(
      np.random.rand(num_student, num_hospital)
  ).tolist()
  if student_pref_len:
    for s in range(num_student):
      student_pref_list[s] = student_pref_list[s][:student_pref_len]
  hosp_seat = np.random.randint(
      max(num_hospital, 1),
      size=max(num_student - num_hospital + num_additional_seat, 0)
  )  # assign each extra seat randomly to a hospital
  hospital_cap = []
  for h in range(num_hospital):
    hospital_cap.append(int(sum(hosp_seat == h) + 1))

  return stablehr.instance.HRInstance(
      hospital_pref_list=hospital_pref_list,
      student_pref_list=student_pref_list,
      hospital_cap=hospital_cap
  )
