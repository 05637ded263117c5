# Author: Yiab
# Copyright: This module is licensed under GPL v3.0.

"""
Utility module for parsing ISO8601 duration strings of the form `PnYnMnDTnHnMnS` or `PnW`. Only whole number values are handled; there is no support for decimal parts, signs, or the alternative `PYYYY-MM-DDThh:mm:ss` format.

Classes:

- `DurationComponents`: The parsed magnitude of each calendar and clock unit

Functions:

- `is_duration_string(target)`: Determine whether or not a string is in ISO8601 duration format
- `extract_components(segment, designators)`: Pull the magnitude of each designator out of part of a duration string
- `parse_duration(target)`: Parse a duration string into `DurationComponents`, or `None`
- `parse_duration_strict(target)`: As `parse_duration`, but raise `ValueError` instead of returning `None`
- `add_duration(target, to, using)`: Parse a duration string and add it to a `datetime.datetime`
"""

__docformat__ = 'restructuredtext'

import datetime
import re
import durationcalendar
import durationconfig
from collections.abc import Sequence
from typing import Optional, Callable, NamedTuple

# Empty digit runs are allowed before a designator, e.g. 'PY' and 'PT1HM' are both valid.
duration_pattern = re.compile(r'P(?:[0-9]*Y)?(?:[0-9]*M)?(?:[0-9]*W)?(?:[0-9]*D)?(?:T(?:[0-9]*H)?(?:[0-9]*M)?(?:[0-9]*S)?)?')

_digits = '0123456789'
_period_designators = { 'Y': 'year', 'M': 'month', 'D': 'day' }
_time_designators = { 'H': 'hour', 'M': 'minute', 'S': 'second' }

class DurationComponents(NamedTuple):
	"""
	The result of parsing a duration string. Each field is `None` if the corresponding designator was absent, otherwise a non-negative integer. Weeks are folded into `day`.
	"""
	year: Optional[int] = None
	month: Optional[int] = None
	day: Optional[int] = None
	hour: Optional[int] = None
	minute: Optional[int] = None
	second: Optional[int] = None

	def as_dict(self) -> dict[str, int]:
		"""
		Only the fields which are set, keyed by field name.
		"""
		return { k: v for k, v in self._asdict().items() if v != None }

	def is_empty(self) -> bool:
		"""
		Whether or not every field is unset, as for the duration 'P'.
		"""
		return not self.as_dict()

CalendarAdd = Callable[[DurationComponents, datetime.datetime], Optional[datetime.datetime]]

def is_duration_string(target: str) -> bool:
	"""
	Determine whether or not the supplied string can be parsed as a duration string.

	Parameters:

	- `target`: A string which may or may not be parsable as a duration
	"""
	if not isinstance(target, str):
		return False
	return duration_pattern.fullmatch(target) != None

def extract_components(segment: str, designators: Sequence[str]) -> dict[str, int]:
	"""
	Find the first run of digits directly followed by each of `designators` in `segment`. A designator with no digits in front of it, or with too many digits to convert, is passed over, and one that never appears is left out of the result.

	Parameters:

	- `segment`: The part of a duration string to search, e.g. the portion between 'P' and 'T'.
	- `designators`: The designator letters to look for.
	"""
	ans = {}
	buf = ''
	for c in segment:
		if c in _digits:
			buf += c
			continue
		if buf and c in designators and c not in ans:
			# Runs too long for int() leave the designator unset.
			try:
				ans[c] = int(buf)
			except ValueError:
				pass
		buf = ''
	return ans

def _parse(target: str) -> Optional[DurationComponents]:
	if not is_duration_string(target):
		return None
	if 'W' in target:
		weeks = extract_components(target, 'W')
		if 'W' not in weeks:
			return None
		return DurationComponents(day = weeks['W'] * 7)
	period, _, time = target[1:].partition('T')
	fields = {}
	for letter, v in extract_components(period, tuple(_period_designators)).items():
		fields[_period_designators[letter]] = v
	for letter, v in extract_components(time, tuple(_time_designators)).items():
		fields[_time_designators[letter]] = v
	return DurationComponents(**fields)

def parse_duration(target: str) -> Optional[DurationComponents]:
	"""
	Translate the given string into its duration components. Returns `None` if the string is not an ISO8601 duration, or if it is a week duration with no number of weeks ('PW').

	Parameters:

	- `target`: The string to be translated
	"""
	return _parse(target)

def parse_duration_strict(target: str) -> DurationComponents:
	"""
	Translate the given string into its duration components.

	Parameters:

	- `target`: The string to be translated; must be in ISO8601 duration format

	Exceptions:

	- `ValueError` raised if `parse_duration(target)` would return `None`.
	"""
	q = _parse(target)
	if q == None:
		raise ValueError(f'String is not formatted as an ISO8601 duration: {target}')
	return q

def add_duration(target: str, to: datetime.datetime, using: CalendarAdd = durationcalendar.calendar_add) -> Optional[datetime.datetime]:
	"""
	Parse `target` and add the resulting duration to `to`. Returns `None` if `target` cannot be parsed, in which case `using` is never called, or if `using` itself returns `None`.

	Parameters:

	- `target`: ISO8601 duration string
	- `to`: The datetime to which the duration will be added
	- `using` (default: `durationcalendar.calendar_add`): Does the actual calendar arithmetic
	"""
	components = _parse(target)
	if components == None:
		durationconfig.log(f"Unable to interpret {target!r} as a duration.")
		return None
	return using(components, to)
