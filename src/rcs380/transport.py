# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2012, 2017 Stephen Tiedemann <stephen.tiedemann@gmail.com>
#
# Licensed under the EUPL, Version 1.1 or - as soon they
# will be approved by the European Commission - subsequent
# versions of the EUPL (the "Licence");
# You may not use this work except in compliance with the
# Licence.
# You may obtain a copy of the Licence at:
#
# https://joinup.ec.europa.eu/software/page/eupl
#
# Unless required by applicable law or agreed to in
# writing, software distributed under the Licence is
# distributed on an "AS IS" basis,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either
# express or implied.
# See the Licence for the specific language governing
# permissions and limitations under the Licence.
# -----------------------------------------------------------------------------
#
# USB bulk transport between host and reader.
#
import os
import re
import errno
from binascii import hexlify

from .error import TransportError, DeviceNotFound

if not os.getenv("READTHEDOCS"):  # pragma: no cover
    try:
        import usb1 as libusb
    except ImportError:  # pragma: no cover
        raise ImportError("missing usb1 module, try 'pip install libusb1'")

import logging
log = logging.getLogger(__name__)

USB_DEVICE_IDS = (
    (0x054c, 0x06c1),  # Sony RC-S380/S
    (0x054c, 0x06c3),  # Sony RC-S380/P
)

DEFAULT_PATH = "usb:054c:06c1"
INTERFACE = 0
ALTERNATE_SETTING = 0
READ_SIZE = 300


class USB(object):
    @classmethod
    def find(cls, path):
        """Return ``(vid, pid, bus, dev)`` for all attached RC-S380 that
        match *path*, or :const:`None` if *path* is not a usb path. The
        *path* is ``usb``, ``usb:vid[:pid]`` with hexadecimal ids, or
        ``usb:bus[:dev]`` with decimal numbers.

        """
        if not path.startswith("usb"):
            return

        log.debug("using libusb-{0}.{1}.{2}".format(*libusb.getVersion()[0:3]))

        usb_or_none = re.compile(r'^(usb|)$')
        usb_vid_pid = re.compile(r'^usb(:[0-9a-fA-F]{4})(:[0-9a-fA-F]{4})?$')
        usb_bus_dev = re.compile(r'^usb(:[0-9]{1,3})(:[0-9]{1,3})?$')

        for regex in (usb_vid_pid, usb_bus_dev, usb_or_none):
            m = regex.match(path)
            if m is not None:
                log.debug("path matches {0!r}".format(regex.pattern))
                if regex is usb_vid_pid:
                    match = [int(s.strip(':'), 16) for s in m.groups() if s]
                    match = dict(zip(['vid', 'pid'], match))
                if regex is usb_bus_dev:
                    match = [int(s.strip(':'), 10) for s in m.groups() if s]
                    match = dict(zip(['bus', 'adr'], match))
                if regex is usb_or_none:
                    match = dict()
                break
        else:
            return None

        with libusb.USBContext() as context:
            devices = context.getDeviceList(skip_on_error=True)
            devices = [d for d in devices if (
                d.getVendorID(), d.getProductID()) in USB_DEVICE_IDS]
            for key, get in (('vid', 'getVendorID'),
                             ('pid', 'getProductID'),
                             ('bus', 'getBusNumber'),
                             ('adr', 'getDeviceAddress')):
                if match.get(key) is not None:
                    devices = [d for d in devices
                               if getattr(d, get)() == match[key]]
            return [(d.getVendorID(), d.getProductID(), d.getBusNumber(),
                     d.getDeviceAddress()) for d in devices]

    @classmethod
    def open_path(cls, path=DEFAULT_PATH):
        """Open the first RC-S380 that matches *path*."""
        found = cls.find(path)
        if not found:
            log.error("no RC-S380 found at {0!r}".format(path))
            raise DeviceNotFound()
        vid, pid, bus, dev = found[0]
        log.debug("open usb:{0:04x}:{1:04x} at usb:{2:03d}:{3:03d}"
                  .format(vid, pid, bus, dev))
        return cls(bus, dev)

    def __init__(self, usb_bus, dev_adr):
        self.context = libusb.USBContext()
        self.open(usb_bus, dev_adr)

    def __del__(self):
        self.close()
        if self.context:  # pragma: no branch
            self.context.exit()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def open(self, usb_bus, dev_adr):
        self.usb_dev = None
        self.usb_out = None
        self.usb_inp = None

        for dev in self.context.getDeviceList(skip_on_error=True):
            if ((dev.getBusNumber() == usb_bus and
                 dev.getDeviceAddress() == dev_adr)):
                break
        else:
            log.error("no device {0} on bus {1}".format(dev_adr, usb_bus))
            raise DeviceNotFound()

        for setting in dev.iterSettings():
            if ((setting.getNumber() == INTERFACE and
                 setting.getAlternateSetting() == ALTERNATE_SETTING)):
                break
        else:
            log.error("no interface {0} alternate setting {1}, please "
                      "replug device".format(INTERFACE, ALTERNATE_SETTING))
            raise DeviceNotFound()

        def transfer_type(x):
            return x & libusb.TRANSFER_TYPE_MASK

        def endpoint_dir(x):
            return x & libusb.ENDPOINT_DIR_MASK

        for endpoint in setting.iterEndpoints():
            ep_addr = endpoint.getAddress()
            ep_attr = endpoint.getAttributes()
            if transfer_type(ep_attr) == libusb.TRANSFER_TYPE_BULK:
                if endpoint_dir(ep_addr) == libusb.ENDPOINT_IN:
                    if not self.usb_inp:
                        self.usb_inp = endpoint
                if endpoint_dir(ep_addr) == libusb.ENDPOINT_OUT:
                    if not self.usb_out:
                        self.usb_out = endpoint

        if not (self.usb_inp and self.usb_out):
            log.error("no bulk endpoints for read and write")
            raise DeviceNotFound()

        try:
            self._manufacturer_name = dev.getManufacturer()
            self._product_name = dev.getProduct()
        except libusb.USBErrorIO:
            self._manufacturer_name = None
            self._product_name = None

        try:
            self.usb_dev = dev.open()
            self.usb_dev.claimInterface(INTERFACE)
        except libusb.USBErrorAccess:
            raise TransportError(errno.EACCES)
        except libusb.USBErrorBusy:
            raise TransportError(errno.EBUSY)
        except libusb.USBErrorNoDevice:
            raise DeviceNotFound()

    def close(self):
        if self.usb_dev:
            self.usb_dev.close()
        self.usb_dev = None
        self.usb_out = None
        self.usb_inp = None

    @property
    def manufacturer_name(self):
        return self._manufacturer_name

    @property
    def product_name(self):
        return self._product_name

    def read(self, timeout=0):
        if self.usb_inp is None:
            raise TransportError(errno.EBADF)
        try:
            ep_addr = self.usb_inp.getAddress()
            frame = self.usb_dev.bulkRead(ep_addr, READ_SIZE, timeout)
        except libusb.USBErrorTimeout:
            raise TransportError(errno.ETIMEDOUT)
        except libusb.USBErrorNoDevice:
            raise TransportError(errno.ENODEV)
        except libusb.USBError as error:
            log.error("%r", error)
            raise TransportError(errno.EIO)

        if len(frame) == 0:
            log.error("bulk read returned zero data")
            raise TransportError(errno.EIO)

        frame = bytearray(frame)
        log.log(logging.DEBUG-1, "<<< %s", hexlify(frame).decode())
        return frame

    def write(self, frame, timeout=0):
        if self.usb_out is None:
            raise TransportError(errno.EBADF)
        log.log(logging.DEBUG-1, ">>> %s", hexlify(frame).decode())
        try:
            ep_addr = self.usb_out.getAddress()
            count = self.usb_dev.bulkWrite(ep_addr, bytes(frame), timeout)
            if len(frame) % self.usb_out.getMaxPacketSize() == 0:
                self.usb_dev.bulkWrite(ep_addr, b'', timeout)
        except libusb.USBErrorTimeout:
            raise TransportError(errno.ETIMEDOUT)
        except libusb.USBErrorNoDevice:
            raise TransportError(errno.ENODEV)
        except libusb.USBError as error:
            log.error("%r", error)
            raise TransportError(errno.EIO)
        return count
