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
from . import utils
from .config import PulumiConfigurationKey
from abc import ABC, abstractmethod
from typing import List, Type
import json
import subprocess


def print_verbose_output(args: list, stdout: str, stderr: str):
    print(f'$ {" ".join(args)}\n', stdout)

    if stderr:
        print(stderr)


class PulumiAction(ABC):
    def __init__(self, verbose=False):
        self.verbose = verbose

    @abstractmethod
    def execute(self):  # pragma: no cover
        pass

    def _run(self, args: List[str], error: Type[Exception], check: bool = True) -> subprocess.CompletedProcess:
        """ runs `pulumi <args>`, raising `error` with stdout (or stderr when stdout is empty) on a non-zero exit code """
        pulumi_binary = utils.find_pulumi_binary()
        cmd           = [pulumi_binary, *args]

        process = subprocess.run(cmd, capture_output=True)

        self._stdout = utils.decode_utf8(process.stdout)
        self._stderr = utils.decode_utf8(process.stderr)

        if check and process.returncode != 0:
            err = self._stdout
            if len(err) == 0:
                err = self._stderr
            raise error(err)

        if self.verbose:
            print_verbose_output(args=process.args, stdout=self._stdout, stderr=self._stderr)

        return process

    @property
    def stdout(self) -> str:
        return self._stdout

    @property
    def stderr(self) -> str:
        return self._stderr


class PulumiLogin(PulumiAction):
    def execute(self, url: str) -> subprocess.CompletedProcess:
        """ logs in to the state backend at `url`, eg. gs://my-bucket """
        return self._run(['login', '--non-interactive', url], exceptions.PulumiLoginExecError)


class PulumiStackSelect(PulumiAction):
    def execute(self, stack: str) -> subprocess.CompletedProcess:
        """ selects `stack`, initializing it first when it does not exist yet """
        self.initialized = False

        process = self._run(['stack', 'select', '--non-interactive', stack], exceptions.PulumiStackSelectExecError, check=False)
        if process.returncode == 0:
            return process

        process = self._run(['stack', 'init', '--non-interactive', stack], exceptions.PulumiStackSelectExecError)
        self.initialized = True
        return process


class PulumiConfigSet(PulumiAction):
    def execute(self, key: PulumiConfigurationKey, project: str) -> subprocess.CompletedProcess:
        return self._run(['config', 'set', '--non-interactive', *key.to_args(project)], exceptions.PulumiConfigSetExecError)


class PulumiPreview(PulumiAction):
    def execute(self) -> subprocess.CompletedProcess:
        return self._run(['preview', '--non-interactive', '--json'], exceptions.PulumiPreviewExecError)

    @property
    def stdout(self) -> dict:
        return json.loads(self._stdout)

    @property
    def diagnostics(self) -> list:
        """ returns the engine diagnostics, or an empty list when stdout is not the preview's JSON document """
        try:
            return self.stdout.get("diagnostics", [])
        except json.JSONDecodeError:
            return []

    @property
    def change_summary(self) -> dict:
        return self.stdout.get("changeSummary", {})

    @property
    def create(self) -> int:
        return self.change_summary.get("create", 0)

    @property
    def same(self) -> int:
        return self.change_summary.get("same", 0)

    @property
    def update(self) -> int:
        return self.change_summary.get("update", 0)

    @property
    def delete(self) -> int:
        return self.change_summary.get("delete", 0)


class PulumiUp(PulumiAction):
    def execute(self) -> subprocess.CompletedProcess:
        return self._run(['up', '--non-interactive', '--yes', '--skip-preview'], exceptions.PulumiUpExecError)


class PulumiStackOutput(PulumiAction):
    def execute(self) -> subprocess.CompletedProcess:
        return self._run(['stack', 'output', '--json', '--non-interactive'], exceptions.PulumiStackOutputError)

    @property
    def outputs(self) -> dict:
        return json.loads(self._stdout)
