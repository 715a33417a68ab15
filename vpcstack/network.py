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

from .config import SubnetConfig
from .firewall import FirewallRuleSpec, derive_firewall_rules
from typing import Any, Dict, List, Sequence
import pulumi
import pulumi_gcp as gcp


class VpcNetwork:
    """
    Declares a Google Cloud VPC network with custom subnets and two firewall rules.

    The network is created with auto subnet creation disabled, every subnet
    has Private Google Access enabled and both firewall rules log all metadata.

    :type name: str
    :param name: The name of the VPC network resource.

    :type region: str
    :param region: The region of every subnet.

    :type subnets_config: list
    :param subnets_config: SubnetConfig entries, one subnet is created per entry in this order.

    :type source_ranges: list
    :param source_ranges: IP ranges allowed by the 'allow-internal' rule.

    :type ssh_source_ranges: list
    :param ssh_source_ranges: trusted IP ranges allowed by the 'allow-ssh' rule. Required.

    :type internal_target_tags: list
    :param internal_target_tags: network tags targeted by the 'allow-internal' rule. Required.

    :type opts: pulumi.ResourceOptions
    :param opts: options applied to every resource declared by this VPC.
    """
    def __init__(
            self,
            name: str,
            region: str,
            subnets_config: Sequence[SubnetConfig],
            source_ranges: Sequence[str],
            ssh_source_ranges: Sequence[str],
            internal_target_tags: Sequence[str],
            opts: pulumi.ResourceOptions = None
    ) -> None:
        self.vpc_name = name
        self.region   = region
        self.opts     = opts

        # derived before any resource is declared so that invalid rules leave nothing behind
        self.firewall_rule_specs = derive_firewall_rules(source_ranges, ssh_source_ranges, internal_target_tags)

        pulumi.log.info(f"Declaring VPC {name} with {len(subnets_config)} subnet(s) in {region}")

        self._vpc            = self.create_network()
        self._subnets        = self.create_subnets(subnets_config)
        self._firewall_rules = self.create_firewall_rules(self.firewall_rule_specs)

    def create_network(self) -> gcp.compute.Network:
        return gcp.compute.Network(
            self.vpc_name,
            auto_create_subnetworks=False,
            opts=self.opts
        )

    def create_subnets(self, subnets_config: Sequence[SubnetConfig]) -> List[gcp.compute.Subnetwork]:
        subnets = []

        for i in subnets_config:
            pulumi.log.debug(f"Declaring subnet {i.name} ({i.cidr_range})")

            subnet = gcp.compute.Subnetwork(
                i.name,
                ip_cidr_range=i.cidr_range,
                region=self.region,
                network=self.vpc.id,
                private_ip_google_access=True,
                opts=self.opts
            )
            subnets.append(subnet)
        return subnets

    def create_firewall_rules(self, specs: Sequence[FirewallRuleSpec]) -> List[gcp.compute.Firewall]:
        rules = []

        for spec in specs:
            pulumi.log.debug(f"Declaring firewall rule {spec.name} for {', '.join(spec.protocols)}")

            rule = gcp.compute.Firewall(
                spec.name,
                network=self.vpc.id,
                allows=[gcp.compute.FirewallAllowArgs(**i.to_dict()) for i in spec.allows],
                source_ranges=list(spec.source_ranges),
                target_tags=list(spec.target_tags) or None,
                direction=spec.direction,
                log_config=gcp.compute.FirewallLogConfigArgs(metadata=spec.log_metadata),
                opts=self.opts
            )
            rules.append(rule)
        return rules

    @property
    def vpc(self) -> gcp.compute.Network:
        return self._vpc

    @property
    def subnets(self) -> List[gcp.compute.Subnetwork]:
        return self._subnets

    @property
    def firewall_rules(self) -> List[gcp.compute.Firewall]:
        return self._firewall_rules

    def get_vpc_details(self) -> Dict[str, Any]:
        """ returns the names and IDs of the VPC and its subnets, in creation order """
        subnet_details = [
            {
                'subnet_name': i.name,
                'subnet_id': i.id,
            }
            for i in self.subnets
        ]

        return {
            'vpc_name': self.vpc.name,
            'vpc_id': self.vpc.id,
            'subnets': subnet_details,
        }

    def export(self, name: str) -> None:
        pulumi.export(name, self.get_vpc_details())
