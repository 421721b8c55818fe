# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Curated lists of formulae that macOS itself provides.

Both sets are fixed for the lifetime of the process and shared read-only
by every cop.
"""

# Formulae that are (or must be) ``keg_only :provided_by_macos``.
PROVIDED_BY_MACOS_FORMULAE: frozenset[str] = frozenset(
    {
        "apr",
        "bc",
        "bc-gh",
        "berkeley-db",
        "bison",
        "bzip2",
        "cups",
        "curl",
        "cyrus-sasl",
        "dyld-headers",
        "ed",
        "expat",
        "file-formula",
        "flex",
        "gperf",
        "icu4c",
        "krb5",
        "libarchive",
        "libedit",
        "libffi",
        "libiconv",
        "libpcap",
        "libressl",
        "libxcrypt",
        "libxml2",
        "libxslt",
        "llvm",
        "lsof",
        "m4",
        "ncompress",
        "ncurses",
        "net-snmp",
        "netcat",
        "openldap",
        "pax",
        "pcsc-lite",
        "pod2man",
        "ruby",
        "sqlite",
        "ssh-copy-id",
        "swift",
        "tcl-tk",
        "unifdef",
        "unzip",
        "whois",
        "zip",
        "zlib",
    }
)

# Not keg-only, but provided by macOS or very similarly (e.g. OpenSSL where
# the system ships LibreSSL).
ALLOWED_USES_FROM_MACOS_DEPS: frozenset[str] = frozenset(
    {
        "bash",
        "cpio",
        "expect",
        "git",
        "groff",
        "gzip",
        "jq",
        "less",
        "mandoc",
        "openssl",
        "perl",
        "php",
        "python",
        "rsync",
        "vim",
        "xz",
        "zsh",
    }
)


def is_provided_by_macos(name: str) -> bool:
    """True if ``name`` may legitimately appear in ``uses_from_macos``."""
    return name in ALLOWED_USES_FROM_MACOS_DEPS or name in PROVIDED_BY_MACOS_FORMULAE
