# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/bootstrap/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from etcdjoin.config.models import BootstrapConfig
from etcdjoin.errors import MissingPeers
from etcdjoin.membership.client import MembersClient
from etcdjoin.membership.models import Member
from etcdjoin.state.inspector import StateInspector
from etcdjoin.utils.execution import ExecutionContext
from .handoff import handoff

log = logging.getLogger("etcdjoin")


class Role(Enum):
    DISCOVERY = "discovery"
    REJOIN = "rejoin"
    PROXY = "proxy"
    NEW_MEMBER = "new-member"


@dataclass(frozen=True)
class Decision:
    role: Role
    reason: str
    env: Dict[str, str] = field(default_factory=dict)


def initial_cluster(members: List[Member], name: str, peer_urls: List[str]) -> str:
    """
    Build the ETCD_INITIAL_CLUSTER value: name=url for every peer URL of
    every member, then the local node. Members that were added but never
    started have no name yet and are listed under their id, as are members
    whose name is already taken.
    """
    entries: Dict[str, List[str]] = {}
    for m in members:
        member_name = m.name
        if member_name and (member_name in entries or member_name == name):
            log.warning("member name %r repeated, listing member %s by id", member_name, m.id)
            member_name = m.id
        member_name = member_name or m.id
        entries.setdefault(member_name, []).extend(m.peer_urls)
    entries.setdefault(name, []).extend(peer_urls)

    return ",".join(
        f"{member_name}={url}"
        for member_name, urls in entries.items()
        for url in urls
    )


class BootstrapEngine:
    """
    Decides how this node starts etcd.

    Checks run in a fixed order and the first match wins:
      1. discovery token set     -> DISCOVERY
      2. role marker on disk     -> REJOIN
      3. no peers                -> MissingPeers
      4. list members            -> ClusterUnreachable on failure
      5. name already a member   -> REJOIN
      6. build initial cluster
      7. enough members          -> PROXY
      8. add member              -> NEW_MEMBER, AddMemberFailed on failure
    """

    def __init__(
        self,
        config: BootstrapConfig,
        *,
        members: Optional[MembersClient] = None,
        inspector: Optional[StateInspector] = None,
    ):
        self.config = config
        self._members = members
        self.inspector = inspector or StateInspector(config.data_dir)

    @property
    def members(self) -> MembersClient:
        if self._members is None:
            self._members = MembersClient(
                self.config.peers, timeout=self.config.request_timeout
            )
        return self._members

    def _decision(self, role: Role, reason: str) -> Decision:
        log.info("starting etcd as %s: %s", role.value, reason)
        return Decision(role=role, reason=reason, env=self.config.environment())

    def decide(self, ctx: ExecutionContext = ExecutionContext()) -> Decision:
        """
        Walk the checks and return the chosen role with its environment.
        In dry-run mode the member list is read but no member is added.
        """
        c = self.config

        if c.discovery:
            c.env["ETCD_DISCOVERY"] = c.discovery
            return self._decision(Role.DISCOVERY, f"ETCD_DISCOVERY is set to {c.discovery}")

        marker = self.inspector.prior_role_marker()
        if marker is not None:
            return self._decision(Role.REJOIN, f"{marker} exists")

        if not c.peers:
            raise MissingPeers("peers cannot be blank")

        existing = self.members.list_members()

        if any(m.name == c.name for m in existing):
            return self._decision(Role.REJOIN, f"{c.name} is already a member")

        c.env["ETCD_INITIAL_CLUSTER"] = initial_cluster(existing, c.name, c.peer_urls)

        if len(existing) >= c.members:
            c.env["ETCD_PROXY"] = "on"
            return self._decision(
                Role.PROXY,
                f"cluster has {len(existing)} members (wanted {c.members})",
            )

        if ctx.dry_run:
            log.info("dry run: not adding %s to the cluster", c.name)
        else:
            added = self.members.add_member(c.peer_urls)
            log.debug("added member id=%s peer urls=%s", added.id, ",".join(c.peer_urls))

        c.env["ETCD_INITIAL_CLUSTER_STATE"] = "existing"
        return self._decision(
            Role.NEW_MEMBER,
            f"joining cluster of {len(existing)} member(s) as {c.name}",
        )

    def run(self, ctx: ExecutionContext = ExecutionContext()) -> Decision:
        """
        Decide and hand off to etcd. Only returns in dry-run mode.
        """
        decision = self.decide(ctx)
        if ctx.dry_run:
            log.info("dry run: not starting etcd")
            return decision
        handoff(self.config.path, decision.env)
