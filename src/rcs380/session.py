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
"""Command sequencing for a single sense request with the RC-S380.

The chip must be configured by a fixed series of commands before it
can poll for a card. A :class:`Session` walks through that series one
:class:`State` at a time and refuses to execute a step out of order::

    transport = rcs380.transport.USB.open_path("usb:054c:06c1")
    session = rcs380.Session(transport, rcs380.CardType.TypeF)
    response = session.run()
    print(response.length, response)

Every step after :meth:`Session.initialize` writes one command frame
and reads back one acknowledgement frame. Errors are not retried. When
a step fails the session keeps the last state that was reached and
only :meth:`Session.initialize` is accepted until the chip was woken
up again.

"""
from . import catalog
from . import frame
from .error import SequenceError

import enum
from binascii import hexlify

import logging
log = logging.getLogger(__name__)


class State(enum.IntEnum):
    POWERED_OFF = 0
    INITIALIZED = 1
    COMMAND_TYPE_SET = 2
    RF_SWITCHED = 3
    RF_TYPE_SET = 4
    PROTOCOL_1_SET = 5
    PROTOCOL_2_SET = 6
    SENSE_REQUEST_SENT = 7
    RESPONSE_AVAILABLE = 8


class Session(object):
    """Sequencing state for one card type on one open *transport*. The
    transport must provide ``write(frame)`` and ``read()``, it is not
    closed by the session.

    """
    def __init__(self, transport, card_type):
        self.transport = transport
        self.card_type = card_type
        self._state = State.POWERED_OFF
        self._failed = False

    @property
    def state(self):
        return self._state

    @property
    def failed(self):
        """True if a step has failed since the last initialize."""
        return self._failed

    def _enter(self, expected):
        if self._failed:
            raise SequenceError(self._state, expected, failed=True)
        if self._state != expected:
            raise SequenceError(self._state, expected)

    def _step(self, expected, target, action):
        self._enter(expected)
        try:
            result = action()
        except Exception:
            self._failed = True
            log.debug("session failed in %s", self._state.name)
            raise
        log.debug("session is %s", target.name)
        self._state = target
        return result

    def _send(self, payload):
        """Write *payload* as a command frame and read one acknowledgement
        frame. The acknowledgement is not interpreted.

        """
        log.debug("%s %s", catalog.command_name(payload),
                  hexlify(bytearray(payload)).decode())
        self.transport.write(frame.encode(payload))
        ack = frame.Response(self.transport.read())
        if ack.type != "ack":
            log.debug("expected ack but got %s", ack.type)
        return ack

    def initialize(self):
        """Write the power-up frame. This is allowed in any state and
        restarts the sequence. The chip does not answer it.

        """
        log.debug("power up %s", hexlify(frame.POWER_UP).decode())
        self._failed = False
        self._state = State.POWERED_OFF
        self._step(State.POWERED_OFF, State.INITIALIZED,
                   lambda: self.transport.write(bytes(frame.POWER_UP)))

    def set_command_type(self):
        self._step(State.INITIALIZED, State.COMMAND_TYPE_SET,
                   lambda: self._send(catalog.SET_COMMAND_TYPE))

    def switch_rf(self):
        self._step(State.COMMAND_TYPE_SET, State.RF_SWITCHED,
                   lambda: self._send(catalog.SWITCH_RF))

    def set_rf(self):
        self._step(State.RF_SWITCHED, State.RF_TYPE_SET, lambda: self._send(
            catalog.rf_activation_params(self.card_type)))

    def set_protocol_1(self):
        self._step(State.RF_TYPE_SET, State.PROTOCOL_1_SET,
                   lambda: self._send(catalog.PROTOCOL_1_PARAMS))

    def set_protocol_2(self):
        self._step(State.PROTOCOL_1_SET, State.PROTOCOL_2_SET,
                   lambda: self._send(
                       catalog.protocol_set_params(self.card_type)))

    def sense_request(self):
        self._step(State.PROTOCOL_2_SET, State.SENSE_REQUEST_SENT,
                   lambda: self._send(
                       catalog.sense_request_payload(self.card_type)))

    def read_response(self):
        """Read two frames after the sense request and return the second
        one as a :class:`~rcs380.frame.Response`. The first frame is
        discarded.

        """
        def action():
            self.transport.read()
            return frame.Response(self.transport.read())

        response = self._step(State.SENSE_REQUEST_SENT,
                              State.RESPONSE_AVAILABLE, action)
        log.debug("response length %s data %s", response.length, response)
        return response

    def run(self):
        """Execute all steps from power-up to the sense response."""
        self.initialize()
        self.set_command_type()
        self.switch_rf()
        self.set_rf()
        self.set_protocol_1()
        self.set_protocol_2()
        self.sense_request()
        return self.read_response()
