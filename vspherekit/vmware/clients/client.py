# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/vmware/clients/client.py
"""
vSphere / vCenter client for vspherekit (pyVmomi).
"""
from __future__ import annotations

import logging
import os
import socket
import ssl
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pyVim.connect import Disconnect, SmartConnect
from pyVmomi import vim, vmodl

from ...core.exceptions import ApiFault, Fatal, wrap_api_fault
from ...core.logger import Log
from ...core.utils import U
from ..inventory import (
    ConfigChange,
    Descriptor,
    HostDescriptor,
    InventoryAccessor,
    ObjectKind,
    VmDescriptor,
)

HOST_BUILD_PATH = "summary.config.product.build"
VM_LATENCY_PATH = "config.latencySensitivity.level"

_PROPERTIES = {
    ObjectKind.HOST: ["name", HOST_BUILD_PATH],
    ObjectKind.VM: ["name", VM_LATENCY_PATH],
}

_RETRIEVE_PAGE_SIZE = 1000


def _vim_type(kind: ObjectKind) -> Any:
    return vim.HostSystem if kind is ObjectKind.HOST else vim.VirtualMachine


def _fault_msg(e: BaseException) -> str:
    return str(getattr(e, "msg", None) or e)


class VMwareClient(InventoryAccessor):
    """
    vSphere/vCenter inventory accessor.

    Reads go through a ContainerView + PropertyCollector so a whole-inventory
    scan is one paged RetrievePropertiesEx call.
    """

    def __init__(
        self,
        logger: logging.Logger,
        host: str,
        user: str,
        password: str,
        *,
        port: int = 443,
        insecure: bool = False,
        timeout: Optional[float] = None,
        task_poll_s: float = 1.0,
    ) -> None:
        self.logger = logger
        self.host = (host or "").strip()
        self.user = (user or "").strip()
        self.password = (password or "").strip()
        self.port = int(port)
        self.insecure = bool(insecure)
        self.timeout = timeout
        self.task_poll_s = float(task_poll_s)

        self.si: Any = None
        self._names: Dict[ObjectKind, Dict[str, Any]] = {}

    @classmethod
    def from_config(cls, logger: logging.Logger, cfg: Dict[str, Any]) -> "VMwareClient":
        """
        Build from merged config/args keys:
          vcenter, vc_user, vc_password | vc_password_env, vc_port, vc_insecure, vc_timeout
        """
        password = cfg.get("vc_password")
        if not password and cfg.get("vc_password_env"):
            password = os.environ.get(str(cfg["vc_password_env"]))
        return cls(
            logger,
            str(cfg.get("vcenter") or ""),
            str(cfg.get("vc_user") or ""),
            str(password or ""),
            port=int(cfg.get("vc_port") or 443),
            insecure=bool(cfg.get("vc_insecure", False)),
            timeout=cfg.get("vc_timeout"),
        )

    def has_creds(self) -> bool:
        return bool(self.host and self.user and self.password)

    # Context managers

    def __enter__(self) -> "VMwareClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.disconnect()
        return False

    # Connection

    def _ssl_context(self) -> ssl.SSLContext:
        """
        SSL context for the SDK connection.

        insecure=True disables certificate verification entirely.
        """
        if self.insecure:
            self.logger.warning(
                "TLS certificate verification is DISABLED (insecure=True). "
                "Only use this in trusted environments with self-signed certificates."
            )
            ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            return ctx
        return ssl.create_default_context()

    def connect(self) -> None:
        if not self.has_creds():
            raise Fatal(2, "vCenter host, user and password are required (--vcenter, --vc-user, --vc-password[-env])")
        ctx = self._ssl_context()
        old_timeout = socket.getdefaulttimeout()
        if self.timeout is not None:
            socket.setdefaulttimeout(self.timeout)
        try:
            self.si = SmartConnect(
                host=self.host,
                user=self.user,
                pwd=self.password,
                port=self.port,
                sslContext=ctx,
            )
        except (vmodl.MethodFault, OSError) as e:
            self.si = None
            raise wrap_api_fault(f"Failed to connect to vSphere: {_fault_msg(e)}", e, host=self.host, port=self.port)
        finally:
            socket.setdefaulttimeout(old_timeout)
        self.logger.info("Connected to vSphere: %s:%s", self.host, self.port)

    def disconnect(self) -> None:
        if self.si is None:
            return
        try:
            Disconnect(self.si)
        except (vmodl.MethodFault, OSError) as e:
            self.logger.warning("Error during disconnect: %s", _fault_msg(e))
        finally:
            self.si = None
            self._names = {}

    def _content(self) -> Any:
        if not self.si:
            raise ApiFault(30, "Not connected")
        try:
            return self.si.RetrieveContent()
        except vmodl.MethodFault as e:
            raise wrap_api_fault(f"Failed to retrieve content: {_fault_msg(e)}", e)

    # PropertyCollector

    def _retrieve(
        self,
        vim_type: Any,
        paths: Sequence[str],
        *,
        obj: Any = None,
    ) -> List[Tuple[Any, Dict[str, Any]]]:
        """
        Fetch `paths` for every `vim_type` object (obj=None) or for one object.
        Returns (managed object, {path: value}); unset paths are absent.
        """
        content = self._content()
        view = None
        try:
            if obj is None:
                view = content.viewManager.CreateContainerView(content.rootFolder, [vim_type], True)
                obj_spec = vim.PropertyCollector.ObjectSpec(
                    obj=view,
                    skip=True,
                    selectSet=[
                        vim.PropertyCollector.TraversalSpec(
                            name="viewTraversal",
                            type=vim.view.ContainerView,
                            path="view",
                            skip=False,
                        )
                    ],
                )
            else:
                obj_spec = vim.PropertyCollector.ObjectSpec(obj=obj, skip=False)

            filter_spec = vim.PropertyCollector.FilterSpec(
                objectSet=[obj_spec],
                propSet=[vim.PropertyCollector.PropertySpec(type=vim_type, pathSet=list(paths), all=False)],
            )
            pc = content.propertyCollector
            result = pc.RetrievePropertiesEx(
                specSet=[filter_spec],
                options=vim.PropertyCollector.RetrieveOptions(maxObjects=_RETRIEVE_PAGE_SIZE),
            )
            objects = list(result.objects or []) if result is not None else []
            token = result.token if result is not None else None
            while token:
                result = pc.ContinueRetrievePropertiesEx(token=token)
                objects.extend(result.objects or [])
                token = result.token
        except vmodl.MethodFault as e:
            raise wrap_api_fault(f"PropertyCollector query failed: {_fault_msg(e)}", e)
        finally:
            if view is not None:
                try:
                    view.Destroy()
                except vmodl.MethodFault as e:
                    self.logger.debug("ContainerView.Destroy failed: %s", _fault_msg(e))

        Log.trace(self.logger, "PropertyCollector returned %d objects", len(objects), type=getattr(vim_type, "__name__", vim_type))
        return [(oc.obj, {p.name: p.val for p in (oc.propSet or [])}) for oc in objects]

    @staticmethod
    def _descriptor(kind: ObjectKind, obj: Any, props: Dict[str, Any]) -> Descriptor:
        name = U.to_text(props.get("name")).strip()
        if kind is ObjectKind.HOST:
            return HostDescriptor(name=name, build=U.as_int(props.get(HOST_BUILD_PATH)), ref=obj)
        level = props.get(VM_LATENCY_PATH)
        return VmDescriptor(name=name, latency_level=str(level) if level is not None else None, ref=obj)

    # InventoryAccessor

    def fetch_all(self, kind: ObjectKind) -> List[Descriptor]:
        rows = self._retrieve(_vim_type(kind), _PROPERTIES[kind])
        out = [self._descriptor(kind, obj, props) for obj, props in rows]
        self.logger.debug("Fetched %d %s objects", len(out), kind.value)
        return out

    def _name_index(self, kind: ObjectKind) -> Dict[str, Any]:
        """name -> managed object, built with one scan per kind and session."""
        index = self._names.get(kind)
        if index is None:
            index = {}
            for obj, props in self._retrieve(_vim_type(kind), ["name"]):
                index.setdefault(U.to_text(props.get("name")).strip(), obj)
            self._names[kind] = index
            self.logger.debug("Indexed %d %s names", len(index), kind.value)
        return index

    def fetch_by_name(self, kind: ObjectKind, name: str) -> Descriptor:
        target = (name or "").strip()
        obj = self._name_index(kind).get(target)
        if obj is not None:
            rows = self._retrieve(_vim_type(kind), _PROPERTIES[kind], obj=obj)
            if rows:
                return self._descriptor(kind, rows[0][0], rows[0][1])
        raise ApiFault(11, f"{kind.value} not found: {target}", context={"name": target})

    def reconfigure(self, vm: VmDescriptor, change: ConfigChange) -> None:
        if change.is_empty():
            return
        if vm.ref is None:
            raise ApiFault(30, f"VM {vm.name} has no managed object reference")

        spec = vim.vm.ConfigSpec()
        spec.latencySensitivity = vim.LatencySensitivity(level=change.latency_level)
        try:
            task = vm.ref.ReconfigVM_Task(spec=spec)
        except vmodl.MethodFault as e:
            raise wrap_api_fault(f"ReconfigVM_Task rejected for {vm.name}: {_fault_msg(e)}", e, vm=vm.name)
        self.wait_for_task(task, what=f"reconfigure {vm.name}")

    def wait_for_task(self, task: Any, *, what: str = "task") -> None:
        try:
            while task.info.state not in (vim.TaskInfo.State.success, vim.TaskInfo.State.error):
                time.sleep(self.task_poll_s)
            if task.info.state == vim.TaskInfo.State.success:
                return
            err = task.info.error
        except vmodl.MethodFault as e:
            raise wrap_api_fault(f"{what}: task polling failed: {_fault_msg(e)}", e)
        raise ApiFault(30, f"{what} failed: {_fault_msg(err) if err is not None else 'unknown error'}")
