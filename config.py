# Build bootstrap defaults. Values come from the environment; a `.env` file in
# the working directory is loaded first.

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Log level used when the command line selects none
DEFAULT_LOG_LEVEL = os.getenv("BUILD_LOG_LEVEL", "lifecycle")

# User home holding caches and other per-user state
GRADLE_USER_HOME = Path(os.path.expanduser(os.getenv("GRADLE_USER_HOME", "~/.gradle")))

# Subdirectory of the user home used for caches
CACHE_DIR_NAME = os.getenv("BUILD_CACHE_DIR_NAME", "caches")

# Name of the per-build cache below CACHE_DIR_NAME
BUILD_CACHE_NAME = os.getenv("BUILD_CACHE_NAME", "build")
