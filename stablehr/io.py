"""Instance input/output."""

import numpy as np
import json
import pickle
from scipy import io as sio

import stablehr.instance
from stablehr.instance import MalformedInputError

__all__ = ["loads_text", "load_text", "format_text", "save_text",
           "save_json", "load_json", "save_mat", "save_pickle", "load_pickle"]


def _parse_ints(line, lineno):
  try:
    return [int(tok) for tok in line.split()]
  except ValueError:
    raise MalformedInputError(
        "Line {0}: expected integers, got {1!r}.".format(lineno, line.strip()))


def loads_text(text):
  """Read an instance from the line-oriented text format.

  Line 1 holds `m n`, the number of hospitals and students. The next `m`
  lines hold one capacity each, then `m` lines of hospital preference lists
  and `n` lines of student preference lists. Ids in preference lists are
  1-indexed and converted to 0-indexed here.

  Args:
    text: content of the input.
  Returns:
    A `HRInstance` object.
  Raises:
    MalformedInputError on missing lines or tokens that are not integers.
  """
  lines = text.splitlines()
  if not lines or not lines[0].strip():
    raise MalformedInputError("Empty input.")

  header = _parse_ints(lines[0], 1)
  if len(header) != 2:
    raise MalformedInputError(
        "Line 1: expected 'm n', got {0} integers.".format(len(header)))
  m, n = header
  if m < 0 or n < 0:
    raise MalformedInputError("Line 1: negative hospital or student count.")
  expected = 1 + 2 * m + n
  if len(lines) < expected:
    raise MalformedInputError(
        "Expected {0} lines for {1} hospitals and {2} students, got {3}.".format(
            expected, m, n, len(lines)))
  if any(line.strip() for line in lines[expected:]):
    raise MalformedInputError(
        "Line {0}: unexpected content after the last student.".format(
            expected + 1))

  hospital_cap = []
  for i in range(1, 1 + m):
    cap = _parse_ints(lines[i], i + 1)
    if len(cap) != 1:
      raise MalformedInputError(
          "Line {0}: expected a single capacity.".format(i + 1))
    hospital_cap.append(cap[0])
  hospital_pref_list = [
      [x - 1 for x in _parse_ints(lines[i], i + 1)]
      for i in range(1 + m, 1 + 2 * m)]
  student_pref_list = [
      [x - 1 for x in _parse_ints(lines[i], i + 1)]
      for i in range(1 + 2 * m, expected)]
  return stablehr.instance.HRInstance(
      hospital_pref_list=hospital_pref_list,
      student_pref_list=student_pref_list,
      hospital_cap=hospital_cap
  )


def load_text(f):
  """Read an instance from a text file name or an open file."""
  if hasattr(f, "read"):
    return loads_text(f.read())
  with open(f) as g:
    return loads_text(g.read())


def format_text(sol):
  """Format a solution as one 1-indexed hospital per student line.

  An unmatched student is written as 0.
  """
  return "".join("{0}\n".format(h + 1) for h in sol.to_list())


def save_text(sol, filename):
  """Save a solution in the text output format.

  Args:
    sol: a `HRSolution` object.
    filename: output file name.
  """
  with open(filename, mode="w") as g:
    g.write(format_text(sol))


def save_json(ins, filename):
  """Save HRInstance to json format.

  Args:
    ins: a `HRInstance` object.
    filename: output file name.
  """
  with open(filename, mode="w") as g:
    json.dump(
        {
            "hospital_pref_list": ins.hospital_pref_list,
            "student_pref_list": ins.student_pref_list,
            "hospital_cap": ins.hospital_cap
        }, g, indent=4
    )


def load_json(filename):
  """Read instance from a json file of preferences.

  Args:
    filename: input json file name.
  Returns:
    A `HRInstance` object.
  """
  with open(filename) as f:
    all_fields = json.load(f)
  try:
    return stablehr.instance.HRInstance(
        hospital_pref_list=all_fields["hospital_pref_list"],
        student_pref_list=all_fields["student_pref_list"],
        hospital_cap=all_fields["hospital_cap"]
    )
  except KeyError as e:
    raise MalformedInputError("Missing field {0} in {1}.".format(e, filename))


def save_mat(ins, filename):
  """Save the preference tables to MATLAB style .mat file.

  Save the padded hospital preference matrix, the student ranking matrix and
  the capacity vector into a '.mat' file for use in MATLAB.

  Args:
    ins: A `HRInstance`.
    filename: output filename with or without '.mat' extension.
  """
  sio.savemat(
        filename,
        {
            "hospital_pref": ins.store.hospital_pref,
            "pref_len": ins.store.pref_len.reshape(-1, 1),
            "ranking": ins.store.ranking,
            "b": np.array(ins.hospital_cap, dtype=np.int32).reshape(-1, 1)
        }
  )


def save_pickle(ins, filename):
  """Save HRInstance to python's pickle format.

  Args:
    ins: a `HRInstance`.
    filename: output file name.
  """
  with open(filename, "wb") as g:
    pickle.dump(
        {
            "hospital_pref_list": ins.hospital_pref_list,
            "student_pref_list": ins.student_pref_list,
            "hospital_cap": ins.hospital_cap
        }, g
    )


def load_pickle(filename):
  """Read instance from a python pickle file of preferences.

  Warning: As official python3 documentation has suggested, pickle format is NOT
  secure against adversarial attack. Please make sure you trust the source of the
  data file.

  Args:
    filename: pickle file name.
  Returns:
    A `HRInstance` object.
  """
  with open(filename, "rb") as f:
    all_data = pickle.load(f)
  try:
    return stablehr.instance.HRInstance(
        hospital_pref_list=all_data["hospital_pref_list"],
        student_pref_list=all_data["student_pref_list"],
        hospital_cap=all_data["hospital_cap"]
    )
  except KeyError as e:
    raise MalformedInputError("Missing field {0} in {1}.".format(e, filename))
