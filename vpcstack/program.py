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

from .config import VpcSettings
from .network import VpcNetwork


STACK_OUTPUT_NAME = 'india_vpc_details'


def declare_vpc(settings: VpcSettings = None) -> VpcNetwork:
    """ declares the VPC described by `settings`, read from the environment when omitted, and exports its details """
    if settings is None:
        settings = VpcSettings.from_environ()

    vpc = VpcNetwork(
        name=settings.name,
        region=settings.region,
        subnets_config=settings.subnets,
        source_ranges=settings.source_ranges,
        ssh_source_ranges=settings.ssh_source_ranges,
        internal_target_tags=settings.internal_target_tags
    )

    vpc.export(STACK_OUTPUT_NAME)
    return vpc
