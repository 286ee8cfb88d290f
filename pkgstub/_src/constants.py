from enum import Enum


STUB_PREFIX = "# stub: "
EXTENSIONS_PREFIX = "# extensions-stub: "
FILES_PREFIX = "# files-stub: "

DESCRIPTOR_HEADER = "# -*- encoding: utf-8 -*-"
DESCRIPTOR_ENCODING = "utf-8"
DESCRIPTOR_SUFFIX = ".spec"

SPECIFICATIONS_DIR = "specifications"
DEFAULT_SPECIFICATIONS_DIR = "default"
PACKAGES_DIR = "packages"
EXTENSIONS_DIR = "extensions"
BUILD_COMPLETE_MARKER = "build.complete"

DEFAULT_HOME = "~/.pkgstub"
DEFAULT_LOG_LEVEL = "WARNING"

HOME_ENV_VAR = "PKGSTUB_HOME"
SOURCE_ENV_VAR = "PKGSTUB_SOURCE"
LOG_LEVEL_ENV_VAR = "PKGSTUB_LOG_LEVEL"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
