"""
stablehr
=============================================
Solving the hospitals/residents problem with deferred acceptance.

Example:

Suppose that we would like to match 3 students (s0, s1, s2) to 2 hospitals
(h0, h1). Every hospital ranks the students it is willing to take, from the
most preferable to the least preferable:
---------------------------------------------
  >>> hospital_pref = [[0, 1, 2],
  ...                  [2, 0, 1]]
---------------------------------------------
Every student ranks the hospitals in the same way. A hospital missing from a
student's list is, by default, worse than every hospital on it:
---------------------------------------------
  >>> student_pref = [[1, 0],
  ...                 [0, 1],
  ...                 [0]]
---------------------------------------------
Now we specify the capacity of the two hospitals:
----------------------------------------------
  >>> hospital_cap = [2, 1]
----------------------------------------------
Construct the instance and solve it. Hospitals propose to students in their
order of preference; a student holds the best offer received so far and
rejects the others. The result is the stable matching that is best for every
hospital:
----------------------------------------------
  >>> import stablehr
  >>> S = stablehr.HRInstance(hospital_pref, student_pref, hospital_cap)
  >>> sol = stablehr.solve(S)
  >>> sol.to_list()
  [0, 0, 1]
----------------------------------------------
What a student does with an offer from a hospital they did not list is set
with `unlisted`: "last" (default), "unacceptable" or "error". With
`strict=True`, a hospital that runs out of students with a seat still free
raises `PreferenceListExhausted` instead of leaving the seat empty.

Instances can also be read from the line-oriented text format with
`stablehr.load_text`, and the matching written back with
`stablehr.format_text`; `python -m stablehr` does both from the shell.
Please refer to the docstring of stablehr.HRSolution to see different ways to
access the solution.
"""

from stablehr.instance import *
from stablehr.io import *
from stablehr.random import *
