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
from . import error                                                # noqa: F401
from . import frame                                                # noqa: F401
from . import catalog                                              # noqa: F401
from . import session                                              # noqa: F401
from .catalog import CardType                                      # noqa: F401
from .session import Session, State                                # noqa: F401
from .error import Error, UnsupportedCardType, SequenceError       # noqa: F401
from .error import TransportError, DeviceNotFound                  # noqa: F401

import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
logging.getLogger(__name__).setLevel(logging.INFO)

# METADATA ####################################################################

__version__ = "0.1.0"

__title__ = "rcs380"
__description__ = "Python driver for the Sony RC-S380 contactless reader."
__uri__ = "https://github.com/h8gi/rcs380"

__author__ = "The rcs380 developers"

__license__ = "EUPL"
__copyright__ = "Copyright (c) 2026 The rcs380 developers"

###############################################################################
