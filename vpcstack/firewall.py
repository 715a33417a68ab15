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
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


ALL_PORTS = '0-65535'
SSH_PORT = '22'

DIRECTION_INGRESS = 'INGRESS'
LOG_INCLUDE_ALL_METADATA = 'INCLUDE_ALL_METADATA'


@dataclass(frozen=True)
class FirewallAllow:
    protocol: str
    ports: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        """ returns the keyword arguments of a gcp.compute.FirewallAllowArgs """
        d: Dict[str, object] = {'protocol': self.protocol}
        if self.ports:
            d['ports'] = list(self.ports)
        return d


@dataclass(frozen=True)
class FirewallRuleSpec:
    """ data class describing a firewall rule before it is declared as a gcp.compute.Firewall """
    name: str
    allows: Tuple[FirewallAllow, ...]
    source_ranges: Tuple[str, ...]
    target_tags: Tuple[str, ...] = ()
    direction: str = DIRECTION_INGRESS
    log_metadata: str = LOG_INCLUDE_ALL_METADATA

    @property
    def protocols(self) -> List[str]:
        return [i.protocol for i in self.allows]


def internal_rule(source_ranges: Sequence[str], target_tags: Sequence[str]) -> FirewallRuleSpec:
    """
    Derives the rule allowing all TCP, UDP and ICMP traffic between
    instances of the VPC.

    :param list source_ranges: the internal IP ranges allowed to connect
    :param list target_tags: the network tags of the instances the rule applies to
    :returns: the 'allow-internal' rule
    :rtype: FirewallRuleSpec
    """
    if not target_tags:
        raise exceptions.MissingTargetTagsError()

    return FirewallRuleSpec(
        name='allow-internal',
        allows=(
            FirewallAllow(protocol='tcp', ports=(ALL_PORTS,)),
            FirewallAllow(protocol='udp', ports=(ALL_PORTS,)),
            FirewallAllow(protocol='icmp'),
        ),
        source_ranges=tuple(source_ranges),
        target_tags=tuple(target_tags),
    )


def ssh_rule(ssh_source_ranges: Sequence[str]) -> FirewallRuleSpec:
    """
    Derives the rule allowing SSH (tcp/22) from trusted IP ranges only.

    :param list ssh_source_ranges: the trusted IP ranges, eg. ['203.0.113.5/32']
    :returns: the 'allow-ssh' rule
    :rtype: FirewallRuleSpec
    """
    if not ssh_source_ranges:
        raise exceptions.MissingSshSourceRangesError()

    return FirewallRuleSpec(
        name='allow-ssh',
        allows=(FirewallAllow(protocol='tcp', ports=(SSH_PORT,)),),
        source_ranges=tuple(ssh_source_ranges),
    )


def derive_firewall_rules(
        source_ranges: Sequence[str],
        ssh_source_ranges: Sequence[str],
        internal_target_tags: Sequence[str]
) -> List[FirewallRuleSpec]:
    """ returns the two rules declared for every VPC: 'allow-internal' and 'allow-ssh' """
    return [
        internal_rule(source_ranges, internal_target_tags),
        ssh_rule(ssh_source_ranges),
    ]
