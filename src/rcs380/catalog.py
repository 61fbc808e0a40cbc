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
"""Command payloads for the NFC Port-100 chipset. The first byte of a
payload is the chip command code, the remaining bytes are parameters.
The byte values are chip configuration data and are kept exactly as
the chip expects them.

"""
import enum

from .error import UnsupportedCardType


class CardType(enum.Enum):
    TypeA = "A"
    TypeB = "B"
    TypeF = "F"


CMD = {
    0x00: "InSetRF",
    0x02: "InSetProtocol",
    0x04: "InCommRF",
    0x06: "SwitchRF",
    0x10: "MaintainFlash",
    0x12: "ResetDevice",
    0x20: "GetFirmwareVersion",
    0x22: "GetPDDataVersion",
    0x24: "GetProperty",
    0x26: "InGetProtocol",
    0x28: "GetCommandType",
    0x2A: "SetCommandType",
    0x30: "InSetRCT",
    0x32: "InGetRCT",
    0x34: "GetPDData",
    0x36: "ReadRegister",
    0x40: "TgSetRF",
    0x42: "TgSetProtocol",
    0x44: "TgSetAuto",
    0x46: "TgSetRFOff",
    0x48: "TgCommRF",
    0x50: "TgGetProtocol",
    0x60: "TgSetRCT",
    0x62: "TgGetRCT",
    0xF0: "Diagnose",
}

SET_COMMAND_TYPE = bytes(bytearray.fromhex("2A01"))
SWITCH_RF = bytes(bytearray.fromhex("0600"))
PROTOCOL_1_PARAMS = bytes(bytearray.fromhex(
    "02 0018 0101 0201 0300 0400 0500 0600 0708 0800 0900"
    "0A00 0B00 0C00 0E04 0F00 1000 1100 1200 1306"))

RF_ACTIVATION_PARAMS = {
    CardType.TypeF: bytes(bytearray.fromhex("00 01 01 0F 01")),
    CardType.TypeA: bytes(bytearray.fromhex("00 02 03 0F 03")),
    CardType.TypeB: bytes(bytearray.fromhex("00 03 07 0F 07")),
}

PROTOCOL_2_PARAMS = {
    CardType.TypeF: bytes(bytearray.fromhex("02 0018")),
    CardType.TypeA: bytes(bytearray.fromhex("02 0006 0100 0200 0501 0707")),
    CardType.TypeB: bytes(bytearray.fromhex("02 0014 0901 0A01 0B01 0C01")),
}

SENSE_REQUEST_PAYLOADS = {
    CardType.TypeF: bytes(bytearray.fromhex("04 6E00 0600FFFF0100")),
    CardType.TypeA: bytes(bytearray.fromhex("04 6E00 26")),
    CardType.TypeB: bytes(bytearray.fromhex("04 6E00 050010")),
}

def check_tables(*tables):
    """Raise :exc:`RuntimeError` unless every card type has an entry in
    every table."""
    for table in tables:
        missing = set(CardType) - set(table)
        if missing:
            raise RuntimeError("incomplete command table, missing {0}".format(
                ", ".join(sorted(t.name for t in missing))))


check_tables(RF_ACTIVATION_PARAMS, PROTOCOL_2_PARAMS, SENSE_REQUEST_PAYLOADS)


def _lookup(table, card_type):
    if not isinstance(card_type, CardType) or card_type not in table:
        raise UnsupportedCardType(card_type)
    return table[card_type]


def rf_activation_params(card_type):
    """InSetRF payload that activates the RF settings for *card_type*."""
    return _lookup(RF_ACTIVATION_PARAMS, card_type)


def protocol_set_params(card_type):
    """InSetProtocol payload with the protocol settings for *card_type*
    that follow the general :data:`PROTOCOL_1_PARAMS`."""
    return _lookup(PROTOCOL_2_PARAMS, card_type)


def sense_request_payload(card_type):
    """InCommRF payload that sends the sense request for *card_type*."""
    return _lookup(SENSE_REQUEST_PAYLOADS, card_type)


def command_name(payload):
    if payload:
        code = bytearray(payload)[0]
        return CMD.get(code, "0x{0:02X}".format(code))
    return ''
