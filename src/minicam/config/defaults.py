"""Defaults applied to unset program settings, and the known option values.

Numeric settings are kept as strings (as typed by the user); the G-code
generator parses them at generation time.
"""

# Code generation
START_LINE_NUMBER = "10"
LINE_NUMBER_STEP = "10"
COORDINATE = "0"
DECIMAL_PLACES = 3
MAX_DECIMAL_PLACES = 20

USE_LINE_NUMBERS = True
SET_ABSOLUTE_COORDINATES = True
SET_ZEROS_AT_START = True
GENERATE_COMMENTS = False
ALLOW_ARCS = False
FORMAT_COMMANDS = False
SET_WORK_COORDINATE_SYSTEM = False
ALLOW_RELATIVE_COORDINATES = False
MOVE_TO_POINT_AT_END = False

# Work coordinate systems
COORDINATE_SYSTEMS = ("G54", "G55", "G56", "G57", "G58", "G59")
DEFAULT_COORDINATE_SYSTEM = "G54"

# Spindle
SPINDLE_CW = "M3"
SPINDLE_CCW = "M4"
SPINDLE_STOP = "M5"
SPINDLE_ENABLE_COMMANDS = (SPINDLE_CW, SPINDLE_CCW)
DEFAULT_SPINDLE_ENABLE_COMMAND = SPINDLE_CW
SPINDLE_SPEED = "1000"
SPINDLE_DELAY_VALUE = "2"

# G4 delay word.  "Pxx." is a UI choice meaning "P with a decimal value".
DELAY_PARAMETER_F = "F"
DELAY_PARAMETER_P = "P"
DELAY_PARAMETER_P_DECIMAL = "Pxx."
SPINDLE_DELAY_PARAMETERS = (DELAY_PARAMETER_F, DELAY_PARAMETER_P, DELAY_PARAMETER_P_DECIMAL)
DEFAULT_SPINDLE_DELAY_PARAMETER = DELAY_PARAMETER_F

ADD_SPINDLE_CODE = False
SET_SPINDLE_SPEED = False
ENABLE_SPINDLE_BEFORE_OPERATIONS = False
ADD_SPINDLE_DELAY_AFTER_ENABLE = False
DISABLE_SPINDLE_AFTER_OPERATIONS = False

# Coolant
COOLANT_ON = "M8"
COOLANT_OFF = "M9"
ADD_COOLANT_CODE = False
ENABLE_COOLANT_AT_START = False
DISABLE_COOLANT_AT_END = False
