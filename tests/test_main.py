# -*- coding: latin-1 -*-

import rcs380
import rcs380.transport
import rcs380.__main__ as cli

import errno
import pytest
from mock import call


def HEX(s):
    return bytearray.fromhex(s)


ACK = HEX('0000ff00ff00')
RSP = HEX('0000ffffff0300fdd70700 2200')


@pytest.fixture()
def transport(mocker):
    transport = mocker.MagicMock(spec=rcs380.transport.USB)
    transport.__enter__.return_value = transport
    transport.__exit__.return_value = False
    mocker.patch('rcs380.transport.USB.open_path').return_value = transport
    return transport


def run(*argv):
    return cli.main(cli.get_parser().parse_args(list(argv)))


class TestParser(object):
    def test_defaults(self):
        args = cli.get_parser().parse_args([])
        assert args.device == "usb:054c:06c1"
        assert args.type == "F"
        assert args.verbose == 0

    def test_options(self):
        args = cli.get_parser().parse_args(
            ['-d', 'usb:001:002', '-t', 'A', '-vvv'])
        assert args.device == "usb:001:002"
        assert args.type == "A"
        assert args.verbose == 3

    def test_invalid_type(self):
        with pytest.raises(SystemExit) as excinfo:
            cli.get_parser().parse_args(['--type', 'C'])
        assert excinfo.value.code == 2


class TestMain(object):
    def test_success(self, transport, capsys):
        transport.read.side_effect = 7 * [ACK] + [RSP]
        assert run('--type', 'B') == 0
        assert capsys.readouterr().out == \
            "3, 0000ffffff0300fdd707002200\n"
        assert transport.write.mock_calls[0] == call(bytes(ACK))
        assert transport.write.call_count == 7
        assert transport.__exit__.called
        rcs380.transport.USB.open_path.assert_called_with("usb:054c:06c1")

    def test_device_not_found(self, mocker, capsys):
        mocker.patch('rcs380.transport.USB.open_path').side_effect = \
            rcs380.DeviceNotFound()
        assert run() == 1
        assert "no RC-S380 found" in capsys.readouterr().err

    @pytest.mark.parametrize("error, message", [
        (errno.EACCES, "access denied"),
        (errno.EBUSY, "is busy"),
        (errno.EIO, "can not open"),
    ])
    def test_open_error(self, mocker, capsys, error, message):
        mocker.patch('rcs380.transport.USB.open_path').side_effect = \
            rcs380.TransportError(error)
        assert run() == 1
        assert message in capsys.readouterr().err

    def test_transport_error(self, transport, capsys):
        transport.read.side_effect = [ACK, ACK,
                                      rcs380.TransportError(errno.ETIMEDOUT)]
        assert run() == 1
        err = capsys.readouterr().err
        assert "failed after RF_SWITCHED" in err
        assert "ETIMEDOUT" in err
        assert transport.__exit__.called


class TestMetadata(object):
    def test_authorship(self):
        assert rcs380.__author__ == "The rcs380 developers"
        assert rcs380.__copyright__.endswith(rcs380.__author__)
        assert "Tiedemann" not in rcs380.__copyright__
