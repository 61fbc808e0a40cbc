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
import os
import errno


class Error(Exception):
    """Base class for exceptions specific to the rcs380 package.

    - UnsupportedCardType
    - SequenceError
    - TransportError

      - DeviceNotFound

    """


class UnsupportedCardType(Error):
    """A card type was requested that has no entry in the command
    catalog.

    """
    def __init__(self, card_type):
        super(UnsupportedCardType, self).__init__(card_type)
        self.card_type = card_type

    def __str__(self):
        return "unsupported card type {0!r}".format(self.card_type)


class SequenceError(Error):
    """A session step was requested out of order, or after an earlier
    step has failed and the session was not initialized again.

    """
    def __init__(self, state, expected, failed=False):
        super(SequenceError, self).__init__(state, expected)
        self.state = state
        self.expected = expected
        self.failed = failed

    def __str__(self):
        if self.failed:
            return "session failed in {0}, initialize to restart".format(
                self.state.name)
        return "session is {0} but must be {1}".format(
            self.state.name, self.expected.name)


class TransportError(Error, IOError):
    """A USB read or write did not succeed. The *errno* attribute tells
    why, most commonly ETIMEDOUT, ENODEV or EIO.

    """
    def __init__(self, errno):
        super(TransportError, self).__init__(errno, os.strerror(errno))

    def __str__(self):
        return "[{0}] {1}".format(
            errno.errorcode.get(self.errno, self.errno), self.strerror)


class DeviceNotFound(TransportError):
    """No matching USB device is present."""

    def __init__(self):
        super(DeviceNotFound, self).__init__(errno.ENODEV)
