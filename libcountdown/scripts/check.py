# Copyright (c) 2020, Tycho Andersen. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import traceback

from libcountdown import confreader


def check_config(options) -> int:
    print("checking countdown config file", options.configfile)
    try:
        config = confreader.Config(options.configfile)
        config.load()
        config.validate()
    except confreader.ConfigError as e:
        print(f"Config error: {e}")
        return 1
    except Exception:
        traceback.print_exc()
        return 1

    if config.expires is None:
        print("no expiry set")
    else:
        print("expires at", config.expires.isoformat())
    print("text surface:", config.sink)
    for name, value in sorted(config.countdown_defaults.items()):
        print(f"  {name} = {value!r}")
    print("config file can be loaded by countdown")
    return 0


def add_subcommand(subparsers, parents):
    parser = subparsers.add_parser("check", parents=parents, help="Check a configuration file.")
    parser.add_argument(
        "-c",
        "--config",
        action="store",
        required=True,
        dest="configfile",
        help="Use the specified configuration file.",
    )
    parser.set_defaults(func=check_config)
