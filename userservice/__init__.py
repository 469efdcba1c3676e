# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User management service with keyset-paginated listing."""

__version__ = "0.1.0"
