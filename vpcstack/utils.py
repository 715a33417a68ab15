# Copyright 2019 Ali (@bincyber)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from . import exceptions
from typing import List, Mapping, Optional
import shutil


def getenv(environ: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Returns the value of an environment variable, falling back to `default`
    when the variable is unset or set to an empty string.

    :param Mapping environ: the environment to read from, eg. os.environ
    :param str key: the name of the environment variable
    :param str default: the value returned when the variable is unset or empty
    :returns: the value of the environment variable or the default
    :rtype: str
    """
    value = environ.get(key)
    if not value:
        return default
    return value


def split_ranges(value: Optional[str]) -> List[str]:
    """ splits a comma separated string into a list of non-empty, stripped items """
    if value is None:
        return []
    return [i.strip() for i in value.split(',') if i.strip()]


def decode_utf8(data: bytes) -> str:
    return data.decode('utf-8')


def find_pulumi_binary() -> str:
    location = shutil.which('pulumi')
    if location is None:
        raise exceptions.PulumiBinaryNotFoundError("Could not find the pulumi binary on the system")
    return location
