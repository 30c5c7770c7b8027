# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Test suite for kuzumodel.

- Unit tests for the parser, compiler, bindings and client
- Integration tests against a temporary Kuzu database
"""
