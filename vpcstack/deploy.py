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
from .actions import PulumiLogin, PulumiStackSelect, PulumiConfigSet, PulumiPreview, PulumiUp, PulumiStackOutput
from .config import DEFAULT_GCP_REGION, PulumiConfigurationKey
from .project import PulumiProject
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Union
import os
import sys


DEFAULT_STACK_NAME = 'dev'
DEPLOY_EVENT_NAME = 'push'
DEPLOY_REF = 'refs/heads/main'

PULUMI_EXEC_ERRORS = (
    exceptions.PulumiBinaryNotFoundError,
    exceptions.PulumiLoginExecError,
    exceptions.PulumiStackSelectExecError,
    exceptions.PulumiConfigSetExecError,
    exceptions.PulumiPreviewExecError,
    exceptions.PulumiUpExecError,
    exceptions.PulumiStackOutputError,
)


@dataclass
class PulumiDeploymentOptions:
    """
    Settings of a pipeline run.

    :param str backend_url: the state backend to log in to, eg. gs://my-state-bucket. Skips `pulumi login` when empty
    :param str stack: the stack to select, or initialize when it does not exist
    :param str project_id: the GCP project, stored as the secret gcp:project
    :param str region: stored as gcp:region
    :param str event_name: the event that triggered the pipeline, eg. push or pull_request
    :param str ref: the git ref the pipeline runs on, eg. refs/heads/main
    :param bool verbose: echo every pulumi command and its output
    """
    backend_url: str = ''
    stack: str = DEFAULT_STACK_NAME
    project_id: str = ''
    region: str = DEFAULT_GCP_REGION
    event_name: str = ''
    ref: str = ''
    verbose: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = None) -> 'PulumiDeploymentOptions':
        if environ is None:
            environ = os.environ

        return cls(
            backend_url=utils.getenv(environ, 'PULUMI_BACKEND_URL', ''),
            stack=utils.getenv(environ, 'STACK_NAME', DEFAULT_STACK_NAME),
            project_id=utils.getenv(environ, 'GCP_PROJECT_ID', ''),
            region=utils.getenv(environ, 'REGION', DEFAULT_GCP_REGION),
            event_name=utils.getenv(environ, 'GITHUB_EVENT_NAME', ''),
            ref=utils.getenv(environ, 'GITHUB_REF', ''),
            verbose=utils.getenv(environ, 'PULUMI_DEPLOY_VERBOSE', 'false').lower() in ('1', 'true', 'yes'),
        )

    @property
    def should_update(self) -> bool:
        """ resources are only updated for a push to the main branch """
        return self.event_name == DEPLOY_EVENT_NAME and self.ref == DEPLOY_REF


class PulumiDeployment:
    """ runs the pipeline steps: login, stack select or init, config set, preview and, on main, up """
    def __init__(
            self,
            directory: Union[str, Path] = None,
            opts: PulumiDeploymentOptions = None
    ) -> None:
        self.opts = PulumiDeploymentOptions() if opts is None else opts

        self.project = PulumiProject.load(directory)

        self.login   = PulumiLogin(verbose=self.opts.verbose)
        self.select  = PulumiStackSelect(verbose=self.opts.verbose)
        self.config  = PulumiConfigSet(verbose=self.opts.verbose)
        self.preview = PulumiPreview(verbose=self.opts.verbose)
        self.up      = PulumiUp(verbose=self.opts.verbose)
        self.output  = PulumiStackOutput(verbose=self.opts.verbose)

    @property
    def config_keys(self) -> List[PulumiConfigurationKey]:
        keys = [PulumiConfigurationKey(name='gcp:region', value=self.opts.region)]

        if self.opts.project_id:
            keys.insert(0, PulumiConfigurationKey(name='gcp:project', value=self.opts.project_id, encrypted=True))

        return keys

    def run(self) -> bool:
        """ executes the pipeline. Returns True when `pulumi up` was run """
        if self.opts.backend_url:
            self.login.execute(self.opts.backend_url)

        self.select.execute(self.opts.stack)
        if self.select.initialized:
            print(f"Initialized stack: {self.opts.stack}")

        for key in self.config_keys:
            self.config.execute(key, project=self.project.name)

        try:
            self.preview.execute()
        except exceptions.PulumiPreviewExecError:
            for i in self.preview.diagnostics:
                print(f"{i.get('severity', 'error')}: {i.get('message', '').strip()}", file=sys.stderr)
            raise

        print(f"Preview of {self.project.name}/{self.opts.stack}: {self.preview.create} to create, {self.preview.update} to update, "
              f"{self.preview.delete} to delete, {self.preview.same} unchanged")

        if not self.opts.should_update:
            print(f"Skipping pulumi up for event '{self.opts.event_name}' on '{self.opts.ref}'")
            return False

        self.up.execute()
        return True

    def get_stack_outputs(self) -> dict:
        """ returns a dictionary of the stack's output properties """
        self.output.execute()
        return self.output.outputs


def main() -> int:
    opts = PulumiDeploymentOptions.from_environ()

    try:
        deployment = PulumiDeployment(opts=opts)
        if deployment.run() and opts.verbose:
            print(deployment.get_stack_outputs())
    except PULUMI_EXEC_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
