# Author: Yiab
# Copyright: This module is licensed under GPL v3.0.

"""
Configuration and log output shared by the duration modules. Settings are read from `durationparse.ini` in the working directory, section `[DURATIONPARSE]`; every setting has a fallback so the file is optional.

Functions:

- `load_config(filename)`: (Re)read the configuration file
- `get_params()`: The active configuration section
- `dt_tostr(dt)`: Render a `datetime.datetime` with the configured timestamp
- `log(message)`: Print a timestamped line when verbose output is enabled
"""

__docformat__ = 'restructuredtext'

import configparser
import datetime
import threading
import dateutil.tz
from typing import Optional, Union

_config_filename = "durationparse.ini"
_section = "DURATIONPARSE"
_defaults = {
	'Timestamp': "[%Y-%m-%d %H:%M:%S {tz}]",
	'Verbose': 'no',
}

_cfg = configparser.ConfigParser(interpolation=None)
_cfg_lock = threading.RLock()

def load_config(filename: Optional[str] = None) -> configparser.SectionProxy:
	"""
	Read the configuration file, replacing whatever was loaded before. Missing files and missing keys fall back to the defaults.

	Parameters:

	- `filename` (default: "durationparse.ini"): The file to read.
	"""
	global _cfg
	with _cfg_lock:
		cfg = configparser.ConfigParser(interpolation=None)
		cfg.read_dict({ _section: _defaults })
		cfg.read(_config_filename if filename == None else filename)
		_cfg = cfg
		return _cfg[_section]

def get_params() -> configparser.SectionProxy:
	"""
	The active `[DURATIONPARSE]` section.
	"""
	with _cfg_lock:
		return _cfg[_section]

def _tz_tostr(t: Union[datetime.tzinfo, None] = None) -> str:
	"""
	Returns a printable name for a time zone. `None` and UTC are both rendered as 'UTC'.

	Parameters:

	- `t` (default: None): The time zone object.
	"""
	if t == None or t == dateutil.tz.UTC:
		return 'UTC'
	tzn = getattr(t, '_filename', None)
	if tzn:
		for prf in dateutil.tz.TZFILES + dateutil.tz.TZPATHS:
			tzn = tzn.removeprefix(prf)
		return tzn.lstrip('/')
	return str(t)

def dt_tostr(dt: Optional[datetime.datetime] = None) -> str:
	"""
	Represents a `datetime` as a `str` using the configured timestamp, together with canonical time zone. Falls back to the default timestamp if the configured one cannot be formatted.

	Parameters:

	- `dt` (default: now): The datetime to stringify.
	"""
	if dt == None:
		dt = datetime.datetime.now(dateutil.tz.UTC)
	tz = _tz_tostr(dt.tzinfo)
	try:
		return dt.strftime(get_params().get('Timestamp')).format(tz = tz)
	except (KeyError, IndexError, ValueError):
		return dt.strftime(_defaults['Timestamp']).format(tz = tz)

def log(message: str) -> bool:
	"""
	Print `message` prefixed with the current timestamp, but only if `Verbose` is switched on. Returns whether anything was printed.

	Parameters:

	- `message`: The text to print.
	"""
	if not get_params().getboolean('Verbose', fallback=False):
		return False
	print(f"{dt_tostr()} {message}")
	return True

load_config()
