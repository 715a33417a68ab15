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

from contextlib import redirect_stdout
from io import StringIO
from vpcstack.actions import PulumiLogin, PulumiStackSelect, PulumiConfigSet, PulumiPreview, PulumiUp, PulumiStackOutput
from vpcstack.config import PulumiConfigurationKey
from vpcstack import exceptions
from unittest.mock import patch, MagicMock
import json
import subprocess
import unittest


def completed(args, returncode=0, stdout=b'', stderr=b''):
    return subprocess.CompletedProcess(args=args, returncode=returncode, stdout=stdout, stderr=stderr)


class PulumiActionTestCase(unittest.TestCase):
    def setUp(self):
        patcher = patch('vpcstack.utils.find_pulumi_binary', MagicMock(return_value='pulumi'))
        patcher.start()
        self.addCleanup(patcher.stop)


class TestPulumiLogin(PulumiActionTestCase):
    def test_execute(self):
        args = ['pulumi', 'login', '--non-interactive', 'gs://state-bucket']

        with patch('subprocess.run', MagicMock(return_value=completed(args, stdout=b'Logged in'))) as run:
            p = PulumiLogin().execute('gs://state-bucket')
            run.assert_called_once_with(args, capture_output=True)

        self.assertEqual(0, p.returncode)

    def test_execute_raises_exception_stderr(self):
        stderr = b'error: problem logging in: bucket does not exist'

        with patch('subprocess.run', MagicMock(return_value=completed([], returncode=255, stderr=stderr))):
            with self.assertRaises(exceptions.PulumiLoginExecError) as e:
                PulumiLogin().execute('gs://missing')

        self.assertEqual(stderr.decode('utf-8'), e.exception.args[0])


class TestPulumiStackSelect(PulumiActionTestCase):
    def test_select_existing_stack(self):
        with patch('subprocess.run', MagicMock(return_value=completed([]))) as run:
            action = PulumiStackSelect()
            action.execute('dev')

        self.assertEqual(1, run.call_count)
        self.assertEqual(['pulumi', 'stack', 'select', '--non-interactive', 'dev'], run.call_args[0][0])
        self.assertFalse(action.initialized)

    def test_init_missing_stack(self):
        side_effect = [
            completed([], returncode=255, stderr=b'error: no stack named dev found'),
            completed([], stdout=b'Created stack dev'),
        ]

        with patch('subprocess.run', MagicMock(side_effect=side_effect)) as run:
            action = PulumiStackSelect()
            action.execute('dev')

        self.assertEqual(2, run.call_count)
        self.assertEqual(['pulumi', 'stack', 'init', '--non-interactive', 'dev'], run.call_args[0][0])
        self.assertTrue(action.initialized)

    def test_init_raises_exception(self):
        side_effect = [
            completed([], returncode=255, stderr=b'error: no stack named dev found'),
            completed([], returncode=255, stderr=b'error: access denied'),
        ]

        with patch('subprocess.run', MagicMock(side_effect=side_effect)):
            with self.assertRaises(exceptions.PulumiStackSelectExecError) as e:
                PulumiStackSelect().execute('dev')

        self.assertEqual('error: access denied', e.exception.args[0])


class TestPulumiConfigSet(PulumiActionTestCase):
    def test_execute_secret(self):
        key = PulumiConfigurationKey(name='gcp:project', value='my-project', encrypted=True)

        with patch('subprocess.run', MagicMock(return_value=completed([]))) as run:
            PulumiConfigSet().execute(key, project='gcp-pulumi')

        expected = ['pulumi', 'config', 'set', '--non-interactive', 'gcp:project', 'my-project', '--secret']
        self.assertEqual(expected, run.call_args[0][0])

    def test_execute_raises_exception(self):
        key = PulumiConfigurationKey(name='gcp:region', value='us-central1')

        with patch('subprocess.run', MagicMock(return_value=completed([], returncode=255, stdout=b'error: no stack selected'))):
            with self.assertRaises(exceptions.PulumiConfigSetExecError) as e:
                PulumiConfigSet().execute(key, project='gcp-pulumi')

        self.assertEqual('error: no stack selected', e.exception.args[0])


class TestPulumiPreview(PulumiActionTestCase):
    def setUp(self):
        super().setUp()
        self.pulumi_preview = PulumiPreview()
        self.args = ['pulumi', 'preview', '--non-interactive', '--json']

    def test_execute(self):
        stdout = b'{"config":{}, "steps":[], "changeSummary":{"create": 5}}'

        with patch('subprocess.run', MagicMock(return_value=completed(self.args, stdout=stdout))) as run:
            p = self.pulumi_preview.execute()
            run.assert_called_once_with(self.args, capture_output=True)

        self.assertIsInstance(p, subprocess.CompletedProcess)
        self.assertDictEqual(json.loads(stdout), self.pulumi_preview.stdout)
        self.assertEqual(5, self.pulumi_preview.create)
        self.assertEqual(0, self.pulumi_preview.update)
        self.assertEqual(0, self.pulumi_preview.delete)
        self.assertEqual(0, self.pulumi_preview.same)

    def test_execute_with_verbosity(self):
        self.pulumi_preview.verbose = True

        stdout = b'{"config":{}, "steps":[], "changeSummary":{"create": 5}}'

        with patch('subprocess.run', MagicMock(return_value=completed(self.args, stdout=stdout))):
            b = StringIO()
            with redirect_stdout(b):
                self.pulumi_preview.execute()

        self.assertTrue(b.getvalue().startswith('$ pulumi preview --non-interactive --json\n'))

    def test_execute_raises_exception(self):
        stdout = b'{"config":{}, "steps":[], "diagnostics":[{"message":"error: invalid value for field ipCidrRange", "severity": "error"}]}'

        with patch('subprocess.run', MagicMock(return_value=completed(self.args, returncode=255, stdout=stdout))):
            with self.assertRaises(exceptions.PulumiPreviewExecError) as e:
                self.pulumi_preview.execute()

        self.assertDictEqual(json.loads(stdout), json.loads(e.exception.args[0]))
        self.assertEqual(1, len(self.pulumi_preview.diagnostics))

    def test_diagnostics_without_json_output(self):
        stderr = b'error: failed to load checkpoint'

        with patch('subprocess.run', MagicMock(return_value=completed(self.args, returncode=255, stderr=stderr))):
            with self.assertRaises(exceptions.PulumiPreviewExecError):
                self.pulumi_preview.execute()

        self.assertListEqual([], self.pulumi_preview.diagnostics)

    def test_change_summary(self):
        self.pulumi_preview._stdout = '{"changeSummary":{"create": 1, "same": 2, "update": 3, "delete": 4}}'

        self.assertEqual(1, self.pulumi_preview.create)
        self.assertEqual(2, self.pulumi_preview.same)
        self.assertEqual(3, self.pulumi_preview.update)
        self.assertEqual(4, self.pulumi_preview.delete)


class TestPulumiUp(PulumiActionTestCase):
    def test_execute(self):
        with patch('subprocess.run', MagicMock(return_value=completed([]))) as run:
            PulumiUp().execute()

        self.assertEqual(['pulumi', 'up', '--non-interactive', '--yes', '--skip-preview'], run.call_args[0][0])

    def test_execute_raises_exception(self):
        stdout = b'error: googleapi: Error 403: Quota exceeded'

        with patch('subprocess.run', MagicMock(return_value=completed([], returncode=255, stdout=stdout))):
            with self.assertRaises(exceptions.PulumiUpExecError) as e:
                PulumiUp().execute()

        self.assertEqual(stdout.decode('utf-8'), e.exception.args[0])


class TestPulumiStackOutput(PulumiActionTestCase):
    def test_outputs(self):
        stdout = b'{"india_vpc_details": {"vpc_name": "india-vpc-1a2b3c", "vpc_id": "projects/p/global/networks/india-vpc-1a2b3c", "subnets": []}}'

        with patch('subprocess.run', MagicMock(return_value=completed([], stdout=stdout))):
            action = PulumiStackOutput()
            action.execute()

        self.assertEqual('india-vpc-1a2b3c', action.outputs['india_vpc_details']['vpc_name'])

    def test_execute_raises_exception(self):
        with patch('subprocess.run', MagicMock(return_value=completed([], returncode=255, stderr=b'error: no stack selected'))):
            with self.assertRaises(exceptions.PulumiStackOutputError):
                PulumiStackOutput().execute()
