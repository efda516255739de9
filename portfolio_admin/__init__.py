# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Admin backend for a file-backed portfolio site: auth, sessions and content removal."""
