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
"""Frame encoding and decoding for the NFC Port-100 host interface.

A command frame carries the command body between a fixed header and a
single trailing zero byte::

    00 00 FF FF FF  LEN(2, little endian)  LCS  D6 PAYLOAD...  DCS  00

LCS and DCS are two's complement checksums of the length bytes and of
the body, so that the sum over each field including its checksum is
zero modulo 256. The chip is woken up by the fixed frame
:data:`POWER_UP`, which is also what the chip sends as acknowledgement.

"""
import struct
from binascii import hexlify

import logging
log = logging.getLogger(__name__)

HEADER = bytearray(b"\x00\x00\xff\xff\xff")
POWER_UP = bytearray(b"\x00\x00\xff\x00\xff\x00")
COMMAND_CLASS = 0xD6


def checksum(data):
    """Return the two's complement of the byte sum of *data*."""
    return (256 - sum(bytearray(data))) % 256


def encode(payload):
    """Wrap a command *payload* into a complete command frame. The body
    length, including the 0xD6 command class byte, must fit the 16-bit
    length field.

    >>> hexlify(encode(b"\\x2a\\x01"))
    b'0000ffffff0300fdd62a01ff00'

    """
    body = bytearray([COMMAND_CLASS]) + bytearray(payload)
    if len(body) > 0xFFFF:
        raise ValueError("command body exceeds 65535 byte")

    length = bytearray(struct.pack("<H", len(body)))
    frame = HEADER + length + bytearray([checksum(length)])
    frame += body + bytearray([checksum(body), 0])
    return bytes(frame)


class Response(object):
    """A frame received from the chip. Only the framing is interpreted,
    the content of :attr:`data` is left to the caller.

    """
    def __init__(self, raw):
        self._raw = bytearray(raw)
        self._type = None
        self._data = None

        if self._raw == POWER_UP:
            self._type = "ack"
        elif self._raw == HEADER:
            self._type = "err"
        elif self._raw[0:5] == HEADER and self.length is not None:
            self._type = "data"
            self._data = self._raw[8:8+self.length]

    def __bytes__(self):
        return bytes(self._raw)

    def __len__(self):
        return len(self._raw)

    def __str__(self):
        return hexlify(self._raw).decode()

    @property
    def type(self):
        """One of 'ack', 'err', 'data' or :const:`None` for an unknown
        frame."""
        return self._type

    @property
    def length(self):
        """The little endian 16-bit value at byte offset 5, or
        :const:`None` if the frame is too short to hold it."""
        if len(self._raw) >= 7:
            return struct.unpack("<H", bytes(self._raw[5:7]))[0]

    @property
    def data(self):
        return self._data
