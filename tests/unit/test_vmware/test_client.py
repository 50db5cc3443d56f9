# SPDX-License-Identifier: LGPL-3.0-or-later
import ssl
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock, PropertyMock, patch

from pyVmomi import vmodl

from vspherekit.core.exceptions import ApiFault, Fatal
from vspherekit.vmware.clients.client import HOST_BUILD_PATH, VM_LATENCY_PATH, VMwareClient
from vspherekit.vmware.inventory import ConfigChange, HostDescriptor, ObjectKind, VmDescriptor
from vspherekit.vmware.vsphere.errors import ExitCode, classify_exit_code

MODULE = "vspherekit.vmware.clients.client"


def _oc(obj, **props):
    return SimpleNamespace(obj=obj, propSet=[SimpleNamespace(name=k, val=v) for k, v in props.items()])


def _page(objects, token=None):
    return SimpleNamespace(objects=objects, token=token)


class TestConnection(unittest.TestCase):
    """Test session setup and teardown."""

    def setUp(self):
        self.logger = Mock()

    def test_missing_credentials_is_usage_error(self):
        client = VMwareClient(self.logger, "vc.example.com", "admin", "")

        with patch(f"{MODULE}.SmartConnect") as sc:
            with self.assertRaises(Fatal) as cm:
                client.connect()

        self.assertEqual(cm.exception.code, 2)
        sc.assert_not_called()

    @patch(f"{MODULE}.Disconnect")
    @patch(f"{MODULE}.SmartConnect")
    def test_context_manager_connects_and_disconnects(self, sc, dc):
        si = Mock()
        sc.return_value = si

        with VMwareClient(self.logger, "vc.example.com", "admin", "pw", port=8443) as client:
            self.assertIs(client.si, si)

        kwargs = sc.call_args.kwargs
        self.assertEqual(kwargs["host"], "vc.example.com")
        self.assertEqual(kwargs["user"], "admin")
        self.assertEqual(kwargs["pwd"], "pw")
        self.assertEqual(kwargs["port"], 8443)
        self.assertIsInstance(kwargs["sslContext"], ssl.SSLContext)
        dc.assert_called_once_with(si)
        self.assertIsNone(client.si)

    @patch(f"{MODULE}.SmartConnect")
    def test_login_fault_becomes_api_fault(self, sc):
        sc.side_effect = vmodl.MethodFault(msg="Cannot complete login due to an incorrect user name or password.")

        with self.assertRaises(ApiFault) as cm:
            VMwareClient(self.logger, "vc", "admin", "wrong").connect()

        self.assertEqual(classify_exit_code(cm.exception), ExitCode.AUTH)
        self.assertEqual(cm.exception.context["host"], "vc")

    @patch(f"{MODULE}.SmartConnect")
    def test_socket_error_is_network(self, sc):
        sc.side_effect = ConnectionRefusedError(111, "Connection refused")

        with self.assertRaises(ApiFault) as cm:
            VMwareClient(self.logger, "vc", "admin", "pw").connect()

        self.assertEqual(classify_exit_code(cm.exception), ExitCode.NETWORK)

    def test_insecure_ssl_context(self):
        ctx = VMwareClient(self.logger, "vc", "u", "p", insecure=True)._ssl_context()

        self.assertEqual(ctx.verify_mode, ssl.CERT_NONE)
        self.assertFalse(ctx.check_hostname)
        self.logger.warning.assert_called()

    def test_secure_ssl_context_verifies(self):
        ctx = VMwareClient(self.logger, "vc", "u", "p")._ssl_context()
        self.assertEqual(ctx.verify_mode, ssl.CERT_REQUIRED)

    def test_from_config_reads_password_env(self):
        with patch.dict("os.environ", {"VC_PW_TEST": "s3cret"}):
            client = VMwareClient.from_config(
                self.logger,
                {"vcenter": "vc", "vc_user": "admin", "vc_password_env": "VC_PW_TEST", "vc_port": 444, "vc_insecure": True},
            )

        self.assertEqual(client.password, "s3cret")
        self.assertEqual(client.port, 444)
        self.assertTrue(client.insecure)
        self.assertTrue(client.has_creds())


class TestInventoryQueries(unittest.TestCase):
    """Test PropertyCollector-backed reads and reconfiguration."""

    def setUp(self):
        self.logger = Mock()
        self.vim = MagicMock()
        patcher = patch(f"{MODULE}.vim", self.vim)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.client = VMwareClient(self.logger, "vc", "admin", "pw", task_poll_s=0)
        self.client.si = MagicMock()
        self.content = self.client.si.RetrieveContent.return_value
        self.pc = self.content.propertyCollector
        self.view = self.content.viewManager.CreateContainerView.return_value

    def test_fetch_all_hosts_follows_pages(self):
        h1, h2 = object(), object()
        self.pc.RetrievePropertiesEx.return_value = _page([_oc(h1, name="esx1", **{HOST_BUILD_PATH: "19193900"})], "tok")
        self.pc.ContinueRetrievePropertiesEx.return_value = _page([_oc(h2, name="esx2")])

        hosts = self.client.fetch_all(ObjectKind.HOST)

        self.assertEqual(hosts, [HostDescriptor("esx1", 19193900), HostDescriptor("esx2", None)])
        self.assertIs(hosts[0].ref, h1)
        self.pc.RetrievePropertiesEx.assert_called_once()
        self.pc.ContinueRetrievePropertiesEx.assert_called_once_with(token="tok")
        self.view.Destroy.assert_called_once()

    def test_fetch_all_vms_reads_latency(self):
        self.pc.RetrievePropertiesEx.return_value = _page([
            _oc(object(), name="db01", **{VM_LATENCY_PATH: "high"}),
            _oc(object(), name="tmpl"),
        ])

        vms = self.client.fetch_all(ObjectKind.VM)

        self.assertEqual(vms, [VmDescriptor("db01", "high"), VmDescriptor("tmpl", None)])

    def test_empty_inventory(self):
        self.pc.RetrievePropertiesEx.return_value = None
        self.assertEqual(self.client.fetch_all(ObjectKind.HOST), [])

    def test_fetch_by_name(self):
        target = object()
        self.pc.RetrievePropertiesEx.side_effect = [
            _page([_oc(object(), name="other"), _oc(target, name="db01")]),
            _page([_oc(target, name="db01", **{VM_LATENCY_PATH: "normal"})]),
        ]

        vm = self.client.fetch_by_name(ObjectKind.VM, "db01")

        self.assertEqual(vm, VmDescriptor("db01", "normal"))
        self.assertIs(vm.ref, target)

    def test_fetch_by_name_scans_names_once(self):
        db01, web01 = object(), object()
        self.pc.RetrievePropertiesEx.side_effect = [
            _page([_oc(db01, name="db01"), _oc(web01, name="web01")]),
            _page([_oc(db01, name="db01", **{VM_LATENCY_PATH: "normal"})]),
            _page([_oc(web01, name="web01", **{VM_LATENCY_PATH: "high"})]),
        ]

        vms = [self.client.fetch_by_name(ObjectKind.VM, n) for n in ("db01", "web01")]

        self.assertEqual(vms, [VmDescriptor("db01", "normal"), VmDescriptor("web01", "high")])
        # one inventory-wide name scan, then one query per object
        self.assertEqual(self.pc.RetrievePropertiesEx.call_count, 3)
        self.content.viewManager.CreateContainerView.assert_called_once()

    def test_fetch_by_name_missing(self):
        self.pc.RetrievePropertiesEx.return_value = _page([_oc(object(), name="other")])

        with self.assertRaises(ApiFault) as cm:
            self.client.fetch_by_name(ObjectKind.HOST, "esx9")

        self.assertEqual(cm.exception.code, 11)
        self.assertEqual(classify_exit_code(cm.exception), ExitCode.NOT_FOUND)

    def test_query_fault(self):
        self.pc.RetrievePropertiesEx.side_effect = vmodl.MethodFault(msg="NotAuthenticated")

        with self.assertRaises(ApiFault):
            self.client.fetch_all(ObjectKind.VM)
        self.view.Destroy.assert_called_once()

    def test_not_connected(self):
        self.client.si = None
        with self.assertRaises(ApiFault):
            self.client.fetch_all(ObjectKind.VM)

    def test_reconfigure_success(self):
        ref = Mock()
        task = ref.ReconfigVM_Task.return_value
        task.info.state = self.vim.TaskInfo.State.success

        self.client.reconfigure(VmDescriptor("db01", "normal", ref=ref), ConfigChange(latency_level="high"))

        self.vim.LatencySensitivity.assert_called_once_with(level="high")
        ref.ReconfigVM_Task.assert_called_once()

    def test_reconfigure_task_error(self):
        ref = Mock()
        task = ref.ReconfigVM_Task.return_value
        task.info.state = self.vim.TaskInfo.State.error
        task.info.error = SimpleNamespace(msg="The operation is not allowed in the current state.")

        with self.assertRaises(ApiFault) as cm:
            self.client.reconfigure(VmDescriptor("db01", "normal", ref=ref), ConfigChange(latency_level="low"))

        self.assertEqual(cm.exception.code, 30)
        self.assertIn("not allowed", str(cm.exception))

    def test_fault_while_polling_task(self):
        ref = Mock()
        task = Mock()
        type(task).info = PropertyMock(side_effect=vmodl.MethodFault(msg="The session is not authenticated."))
        ref.ReconfigVM_Task.return_value = task

        with self.assertRaises(ApiFault) as cm:
            self.client.reconfigure(VmDescriptor("db01", "normal", ref=ref), ConfigChange(latency_level="high"))

        self.assertIsInstance(cm.exception.cause, vmodl.MethodFault)
        self.assertIn("reconfigure db01", str(cm.exception))

    def test_reconfigure_rejected(self):
        ref = Mock()
        ref.ReconfigVM_Task.side_effect = vmodl.MethodFault(msg="InvalidArgument")

        with self.assertRaises(ApiFault):
            self.client.reconfigure(VmDescriptor("db01", "normal", ref=ref), ConfigChange(latency_level="low"))

    def test_empty_change_is_noop(self):
        ref = Mock()
        self.client.reconfigure(VmDescriptor("db01", "normal", ref=ref), ConfigChange())
        ref.ReconfigVM_Task.assert_not_called()
