# Author: Yiab
# Copyright: This module is licensed under GPL v3.0.

"""
Calendar arithmetic for parsed durations, delegated to `dateutil.relativedelta`. Month-length variation, leap years and the like are all handled by `dateutil`; nothing here does calendar math of its own.

Functions:

- `to_relativedelta(components)`: Turn parsed components into a `dateutil.relativedelta.relativedelta`
- `calendar_add(components, base)`: Add parsed components to a `datetime.datetime`
"""

__docformat__ = 'restructuredtext'

import datetime
import dateutil.relativedelta
import durationconfig
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
	from durationparse import DurationComponents

# Component field name -> relativedelta keyword.
_field_map = {
	'year': 'years',
	'month': 'months',
	'day': 'days',
	'hour': 'hours',
	'minute': 'minutes',
	'second': 'seconds',
}

def to_relativedelta(components: 'DurationComponents') -> dateutil.relativedelta.relativedelta:
	"""
	Translate parsed duration components into a relative delta. Unset fields count as zero.

	Parameters:

	- `components`: The result of `durationparse.parse_duration`.
	"""
	return dateutil.relativedelta.relativedelta(**{ _field_map[k]: v for k, v in components.as_dict().items() })

def calendar_add(components: 'DurationComponents', base: datetime.datetime) -> Optional[datetime.datetime]:
	"""
	Add the duration to `base`. Returns `None` if the result cannot be represented as a `datetime.datetime`.

	Parameters:

	- `components`: The duration to add.
	- `base`: The datetime the duration is added to. Its time zone, if any, is kept.
	"""
	delta = to_relativedelta(components)
	try:
		return base + delta
	except (OverflowError, ValueError):
		durationconfig.log(f"Unable to add {delta} to {base.isoformat()}.")
		return None
