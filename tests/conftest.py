"""Global test fixtures."""

import os

import logfire

# Keep tests independent of a developer's config file and log file
os.environ.pop("KVB_CONFIG_FILE", None)
os.environ.pop("KVB_LOG_FILE", None)

# Spans are created by the keys service; never export them from tests
logfire.configure(send_to_logfire=False, console=False)
