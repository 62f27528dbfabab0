from importlib.metadata import version, PackageNotFoundError
from py_mecanum.defs import *
from py_mecanum.base_classes import *
from py_mecanum.function_generators import *
from py_mecanum.core import *
from py_mecanum.wrapper import *
from py_mecanum.conv_matplotlib import *


try:
    __version__ = version("py_mecanum")
except PackageNotFoundError:
    __version__ = "unknown version"
