# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/errors.py


class BootstrapError(RuntimeError):
    """Base class for every failure that stops a bootstrap run."""


class ConfigError(BootstrapError):
    """Raised when a required option is missing or invalid."""


class MissingPeers(ConfigError):
    """Raised when no bootstrap peers are configured and a join is needed."""


class AddressResolutionError(BootstrapError):
    """Raised when no usable local IPv4 address can be found."""


NoAddressFound = AddressResolutionError


class StateInspectionError(BootstrapError):
    """Raised when the data directory cannot be inspected."""


class ClusterUnreachable(BootstrapError):
    """Raised when the members API cannot be reached or answers badly."""


class MembershipTimeout(ClusterUnreachable):
    """Raised when a members API request exceeds its timeout."""


class AddMemberFailed(BootstrapError):
    """Raised when the cluster refuses to add this node as a member."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


class ExecFailed(BootstrapError):
    """Raised when the etcd binary could not replace this process."""
