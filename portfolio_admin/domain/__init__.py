# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .clock import Clock, parse_iso, to_iso, utc_now

__all__ = ["Clock", "parse_iso", "to_iso", "utc_now"]
