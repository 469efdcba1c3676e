# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, DatabaseConfig, PubSubConfig, ServerConfig, load_config

__all__ = ["AppConfig", "DatabaseConfig", "PubSubConfig", "ServerConfig", "load_config"]
