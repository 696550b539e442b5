"""
Help, usage and version text for the command-line front end.

Kept separate so the interpreter and CLI modules stay readable.
"""

from __future__ import annotations

from yucon import PROGRAM_TITLE

COPYRIGHT_NOTICE = "Copyright (C) 2016-2017 Blaine Murphy"

USAGE = """\
yucon [options]
       yucon [options] #### <input_unit> <output_unit>
       yucon -b [options] [input file]"""

DESCRIPTION = """\
In first form, run an interactive session for converting units.
In second form, perform the conversion given on the command line.
In third form, convert every line of the input file, or of stdin when no
file is given.
"""

EPILOG = """\
unit syntax:
    _<prefix><unit>   apply a metric prefix, e.g. _km, _ug, _MW
    :                 recall the unit used last time on the same side
    _<prefix>:        recall the last unit and apply a metric prefix
    a value of ':' recalls the last value

examples:
    $ yucon -v 1 in mm
      1 in = 25.4 mm

    $ yucon -b -q -o output.txt input.txt
      convert every line of input.txt into output.txt, no console output

This is free software licensed under the GNU General Public License v3.
"""

INTERACTIVE_HELP = f"""\
Enter a conversion or command. Conversions expected in format:
    #### <input_unit> <output_unit>

Commands:
    exit, quit            exit the program
    help                  print this help message
    version               print version and license info
    format [s|d|v]        show or set the output format
    value [number]        show or set the recalled value
    input_unit [unit]     show or set the recalled input unit
    output_unit [unit]    show or set the recalled output unit
    units [type]          list known units, optionally of one type

{EPILOG}"""

LICENSE_NOTICE = """\
This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.
"""


def version_text() -> str:
    return f"{PROGRAM_TITLE}\n    {COPYRIGHT_NOTICE}\n\n{LICENSE_NOTICE}"
