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


class VpcConfigurationError(Exception):
    """ raised when a VPC cannot be declared from the parameters it was given """


class MissingSshSourceRangesError(VpcConfigurationError):
    """ raised when no trusted source ranges are supplied for the SSH firewall rule """
    def __init__(self, message='SSH source ranges must be supplied explicitly'):
        super().__init__(message)


class MissingTargetTagsError(VpcConfigurationError):
    """ raised when no target tags are supplied for the internal firewall rule """
    def __init__(self, message='Target tags for the internal firewall rule must be supplied explicitly'):
        super().__init__(message)


class PulumiBinaryNotFoundError(Exception):
    """ raised when the pulumi binary cannot be found on the system """
    def __init__(self, message='Could not find the pulumi binary on the system'):
        super().__init__(message)


class PulumiLoginExecError(Exception):
    """ raised when `pulumi login` returns non-zero exit code """


class PulumiStackSelectExecError(Exception):
    """ raised when both `pulumi stack select` and `pulumi stack init` return non-zero exit code """


class PulumiConfigSetExecError(Exception):
    """ raised when `pulumi config set` returns non-zero exit code """


class PulumiStackOutputError(Exception):
    """ raised when pulumi fails to return stack outputs """


class PulumiPreviewExecError(Exception):
    """ raised when `pulumi preview` returns non-zero exit code """


class PulumiUpExecError(Exception):
    """ raised when `pulumi up` returns non-zero exit code """
