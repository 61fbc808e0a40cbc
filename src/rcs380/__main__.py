# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2016 Stephen Tiedemann <stephen.tiedemann@gmail.com>
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
import rcs380
import rcs380.transport

import sys
import errno
import logging
import argparse

description = """

Wake up an RC-S380 contactless reader, configure it for one card type
and send a single sense request. The length field and the raw bytes of
the frame that the reader returns are printed as '<length>, <hex>'.

"""


def main(args):
    logging.basicConfig()
    log_levels = (logging.WARN, logging.INFO, logging.DEBUG, logging.DEBUG-1)
    log_level = log_levels[min(args.verbose, len(log_levels) - 1)]
    logging.getLogger('rcs380').setLevel(log_level)

    card_type = rcs380.CardType(args.type)

    try:
        transport = rcs380.transport.USB.open_path(args.device)
    except rcs380.DeviceNotFound:
        print("no RC-S380 found at %s" % args.device, file=sys.stderr)
        return 1
    except IOError as error:
        if error.errno == errno.EACCES:
            print("access denied for device at %s" % args.device,
                  file=sys.stderr)
        elif error.errno == errno.EBUSY:
            print("the device at %s is busy" % args.device, file=sys.stderr)
        else:
            print("can not open %s: %s" % (args.device, error),
                  file=sys.stderr)
        return 1

    with transport:
        session = rcs380.Session(transport, card_type)
        try:
            response = session.run()
        except rcs380.UnsupportedCardType as error:
            print(error, file=sys.stderr)
            return 1
        except (rcs380.SequenceError, IOError) as error:
            print("failed after %s: %s" % (session.state.name, error),
                  file=sys.stderr)
            return 1

    print("%s, %s" % (response.length, response))
    return 0


def get_parser():
    parser = argparse.ArgumentParser(
        prog="python -m rcs380",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=description)
    parser.add_argument(
        "-d", "--device", default=rcs380.transport.DEFAULT_PATH,
        help="usb path of the reader (default: %(default)s)")
    parser.add_argument(
        "-t", "--type", default="F", choices=[t.value for t in
                                              rcs380.CardType],
        help="card type to sense for (default: %(default)s)")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="increase logging, twice for debug, three times for frames")
    return parser


if __name__ == '__main__':
    sys.exit(main(get_parser().parse_args()))
