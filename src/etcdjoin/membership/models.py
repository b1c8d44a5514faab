# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/membership/models.py

from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A cluster member as reported by GET /v2/members."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    name: str = ""                   # empty until the member has started once
    peer_urls: List[str] = Field(default_factory=list, alias="peerURLs")
    client_urls: List[str] = Field(default_factory=list, alias="clientURLs")


class MemberList(BaseModel):
    members: List[Member] = Field(default_factory=list)
