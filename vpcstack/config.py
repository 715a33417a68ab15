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

from . import utils
from dataclasses import dataclass, field
from typing import List, Mapping, Union
import os


DEFAULT_VPC_NAME = 'india-vpc'
DEFAULT_GCP_REGION = 'us-central1'
DEFAULT_CIDR_RANGE_1 = '10.0.0.0/16'
DEFAULT_CIDR_RANGE_2 = '10.1.0.0/16'
DEFAULT_SOURCE_RANGE = '10.0.0.0/8'
DEFAULT_INTERNAL_TARGET_TAGS = 'internal'


@dataclass(frozen=True)
class SubnetConfig:
    """ name and CIDR range of a single subnetwork """
    name: str
    cidr_range: str


@dataclass(frozen=True)
class VpcSettings:
    """
    Parameters of the VPC declared by the Pulumi program.

    The SSH source ranges have no default: when VPC_SSH_SOURCE_RANGE is unset
    the list is empty and declaring the VPC fails.
    """
    name: str = DEFAULT_VPC_NAME
    region: str = DEFAULT_GCP_REGION
    subnets: List[SubnetConfig] = field(default_factory=list)
    source_ranges: List[str] = field(default_factory=list)
    ssh_source_ranges: List[str] = field(default_factory=list)
    internal_target_tags: List[str] = field(default_factory=list)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = None) -> 'VpcSettings':
        """ builds the settings from environment variables. Unset or empty variables take their defaults """
        if environ is None:
            environ = os.environ

        subnets = [
            SubnetConfig(name='vpc-subnet-1', cidr_range=utils.getenv(environ, 'VPC_CIDR_RANGE_1', DEFAULT_CIDR_RANGE_1)),
            SubnetConfig(name='vpc-subnet-2', cidr_range=utils.getenv(environ, 'VPC_CIDR_RANGE_2', DEFAULT_CIDR_RANGE_2)),
        ]

        return cls(
            name=DEFAULT_VPC_NAME,
            region=utils.getenv(environ, 'GCP_REGION', DEFAULT_GCP_REGION),
            subnets=subnets,
            source_ranges=utils.split_ranges(utils.getenv(environ, 'VPC_SOURCE_RANGE', DEFAULT_SOURCE_RANGE)),
            ssh_source_ranges=utils.split_ranges(utils.getenv(environ, 'VPC_SSH_SOURCE_RANGE')),
            internal_target_tags=utils.split_ranges(utils.getenv(environ, 'VPC_INTERNAL_TARGET_TAGS', DEFAULT_INTERNAL_TARGET_TAGS)),
        )


@dataclass
class PulumiConfigurationKey:
    """ a single stack configuration value, set with `pulumi config set` """
    name: str
    value: Union[int, float, str, bool]
    encrypted: bool = False

    def qualified_name(self, project: str) -> str:
        """ keys without a namespace belong to the project, eg. 'region' becomes '<project>:region' """
        if self.name.find(':') == -1:
            return f'{project}:{self.name}'
        return self.name

    def to_args(self, project: str) -> List[str]:
        """ returns the arguments that follow `pulumi config set` for this key """
        value = str(self.value).lower() if isinstance(self.value, bool) else str(self.value)
        args  = [self.qualified_name(project), value]

        if self.encrypted:
            args.append('--secret')
        else:
            args.append('--plaintext')

        return args
