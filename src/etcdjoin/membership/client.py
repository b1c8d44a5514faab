# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/membership/client.py

from __future__ import annotations

import logging
from typing import Any, List, Sequence

import requests
from pydantic import ValidationError

from etcdjoin.errors import AddMemberFailed, ClusterUnreachable, MembershipTimeout
from .models import Member, MemberList

log = logging.getLogger("etcdjoin")

MEMBERS_PATH = "/v2/members"


class MembersClient:
    """
    Minimal client for the etcd members API.

    Each call makes one bounded attempt. Endpoints are tried in the order
    given; a refused connection moves on to the next one, a timeout ends
    the call.
    """

    def __init__(self, endpoints: Sequence[str], *, timeout: float = 5.0):
        if not endpoints:
            raise ClusterUnreachable("no endpoints to contact")
        self.endpoints = [e.rstrip("/") for e in endpoints]
        self.timeout = timeout

    def _request(self, method: str, **kwargs: Any) -> requests.Response:
        errors: List[str] = []
        for endpoint in self.endpoints:
            url = f"{endpoint}{MEMBERS_PATH}"
            log.debug("%s %s", method, url)
            try:
                return requests.request(method, url, timeout=self.timeout, **kwargs)
            except requests.Timeout as exc:
                raise MembershipTimeout(
                    f"{method} {url} timed out after {self.timeout}s"
                ) from exc
            except requests.ConnectionError as exc:
                log.debug("endpoint %s unreachable: %s", endpoint, exc)
                errors.append(f"{endpoint}: {exc}")
            except requests.RequestException as exc:
                raise ClusterUnreachable(f"{method} {url} failed: {exc}") from exc
        raise ClusterUnreachable("no endpoint reachable: " + "; ".join(errors))

    def list_members(self) -> List[Member]:
        r = self._request("GET")
        if not r.ok:
            raise ClusterUnreachable(f"failed to list members: {r.status_code} {r.text}")
        try:
            members = MemberList.model_validate(r.json()).members
        except (ValueError, ValidationError) as exc:
            raise ClusterUnreachable(f"unexpected members response: {r.text}") from exc
        log.debug("cluster reports %d member(s)", len(members))
        return members

    def add_member(self, peer_urls: Sequence[str]) -> Member:
        """
        Register peer_urls as a new voting member.

        The cluster answers 201 with the new member; 409 means one of the
        URLs is already registered.
        """
        try:
            r = self._request("POST", json={"peerURLs": list(peer_urls)})
        except ClusterUnreachable as exc:
            raise AddMemberFailed(str(exc)) from exc

        if r.status_code == 409:
            raise AddMemberFailed(
                f"peer URLs already registered: {r.text}", status=r.status_code
            )
        if not r.ok:
            raise AddMemberFailed(
                f"add member failed: {r.status_code} {r.text}", status=r.status_code
            )

        try:
            return Member.model_validate(r.json())
        except (ValueError, ValidationError):
            # Accepted, body is informational only.
            return Member(peer_urls=list(peer_urls))
