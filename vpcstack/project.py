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

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import yaml


@dataclass(frozen=True)
class PulumiProject:
    """ data class to model Pulumi project YAML file: Pulumi.yaml """
    name: str
    runtime: str = "python"
    description: str = ""

    @classmethod
    def load(cls, directory: Union[str, Path] = None) -> 'PulumiProject':
        """ reads the Pulumi.yaml file in `directory`. Defaults to the current working directory """
        filepath = cls.filepath(directory)
        contents = yaml.safe_load(filepath.read_text())

        runtime = contents.get('runtime', 'python')
        if isinstance(runtime, dict):
            runtime = runtime['name']  # runtime may be given as {'name': ..., 'options': ...}

        return cls(
            name=contents['name'],
            runtime=runtime,
            description=contents.get('description', '')
        )

    @staticmethod
    def filepath(directory: Union[str, Path] = None) -> Path:
        if directory is None:
            directory = Path.cwd()
        return Path(directory).joinpath('Pulumi.yaml')
