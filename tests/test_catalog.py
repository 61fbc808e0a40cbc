# -*- coding: latin-1 -*-

import rcs380
import rcs380.catalog
from rcs380.catalog import CardType

import pytest


def HEX(s):
    return bytearray.fromhex(s)


LOOKUPS = [
    rcs380.catalog.rf_activation_params,
    rcs380.catalog.protocol_set_params,
    rcs380.catalog.sense_request_payload,
]


class TestCardType(object):
    @pytest.mark.parametrize("value, card_type", [
        ('A', CardType.TypeA),
        ('B', CardType.TypeB),
        ('F', CardType.TypeF),
    ])
    def test_value(self, value, card_type):
        assert CardType(value) is card_type

    def test_closed(self):
        assert len(CardType) == 3
        with pytest.raises(ValueError):
            CardType('C')


class TestLookup(object):
    @pytest.mark.parametrize("card_type, rf, protocol, sense", [
        (CardType.TypeF, '0001010f01', '020018', '046e000600ffff0100'),
        (CardType.TypeA, '0002030f03', '0200060100020005010707', '046e0026'),
        (CardType.TypeB, '0003070f07', '02001409010a010b010c01',
         '046e00050010'),
    ])
    def test_tables(self, card_type, rf, protocol, sense):
        assert rcs380.catalog.rf_activation_params(card_type) == HEX(rf)
        assert rcs380.catalog.protocol_set_params(card_type) == HEX(protocol)
        assert rcs380.catalog.sense_request_payload(card_type) == HEX(sense)

    @pytest.mark.parametrize("lookup", LOOKUPS)
    def test_every_card_type(self, lookup):
        for card_type in CardType:
            assert isinstance(lookup(card_type), bytes)

    @pytest.mark.parametrize("card_type", [
        'F', 'A', 'C', None, 0, 3.14, ['F'], CardType,
    ])
    @pytest.mark.parametrize("lookup", LOOKUPS)
    def test_unsupported(self, lookup, card_type):
        with pytest.raises(rcs380.UnsupportedCardType) as excinfo:
            lookup(card_type)
        assert excinfo.value.card_type is card_type
        assert not isinstance(excinfo.value, IOError)

    def test_tables_are_complete(self):
        tables = (rcs380.catalog.RF_ACTIVATION_PARAMS,
                  rcs380.catalog.PROTOCOL_2_PARAMS,
                  rcs380.catalog.SENSE_REQUEST_PAYLOADS)
        for table in tables:
            assert set(table) == set(CardType)
        assert rcs380.catalog.check_tables(*tables) is None

    def test_incomplete_table_raises(self):
        table = dict(rcs380.catalog.SENSE_REQUEST_PAYLOADS)
        del table[CardType.TypeB]
        with pytest.raises(RuntimeError) as excinfo:
            rcs380.catalog.check_tables(
                rcs380.catalog.RF_ACTIVATION_PARAMS, table)
        assert str(excinfo.value) == \
            "incomplete command table, missing TypeB"

    def test_sense_request_type_f_length(self):
        payload = rcs380.catalog.sense_request_payload(CardType.TypeF)
        assert len(payload) == 9


class TestConstants(object):
    def test_set_command_type(self):
        assert rcs380.catalog.SET_COMMAND_TYPE == HEX('2a01')

    def test_switch_rf(self):
        assert rcs380.catalog.SWITCH_RF == HEX('0600')

    def test_protocol_1_params(self):
        assert rcs380.catalog.PROTOCOL_1_PARAMS == HEX(
            '02 00 18 01 01 02 01 03 00 04 00 05 00 06 00 07 08 08 00 09 00'
            '0a 00 0b 00 0c 00 0e 04 0f 00 10 00 11 00 12 00 13 06')


class TestCommandName(object):
    @pytest.mark.parametrize("payload, name", [
        ('2a01', 'SetCommandType'),
        ('0600', 'SwitchRF'),
        ('0001010f01', 'InSetRF'),
        ('020018', 'InSetProtocol'),
        ('046e0026', 'InCommRF'),
        ('ee', '0xEE'),
        ('', ''),
    ])
    def test_name(self, payload, name):
        assert rcs380.catalog.command_name(HEX(payload)) == name


class TestErrors(object):
    def test_unsupported_card_type_str(self):
        assert str(rcs380.UnsupportedCardType('C')) == \
            "unsupported card type 'C'"

    def test_sequence_error_str(self):
        error = rcs380.SequenceError(rcs380.State.INITIALIZED,
                                     rcs380.State.PROTOCOL_2_SET)
        assert str(error) == \
            "session is INITIALIZED but must be PROTOCOL_2_SET"
        error = rcs380.SequenceError(rcs380.State.RF_SWITCHED,
                                     rcs380.State.RF_SWITCHED, failed=True)
        assert str(error) == "session failed in RF_SWITCHED, " \
                             "initialize to restart"

    def test_transport_error(self):
        import errno
        error = rcs380.TransportError(errno.ETIMEDOUT)
        assert isinstance(error, IOError)
        assert isinstance(error, rcs380.Error)
        assert error.errno == errno.ETIMEDOUT
        assert str(error).startswith("[ETIMEDOUT] ")

    def test_device_not_found(self):
        import errno
        error = rcs380.DeviceNotFound()
        assert isinstance(error, rcs380.TransportError)
        assert error.errno == errno.ENODEV
