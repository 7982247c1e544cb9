from __future__ import annotations

import pytest

from vcsync.core.errors import NotFoundError
from vcsync.domain.models import VirtualCluster


class FakeNamespaceLister:
    """In-memory stand-in for a namespace informer lister."""

    def __init__(self, *namespaces):
        self.items = {ns.metadata.name: ns for ns in namespaces}

    def get(self, name):
        try:
            return self.items[name]
        except KeyError:
            raise NotFoundError("namespace", name) from None


@pytest.fixture
def vc() -> VirtualCluster:
    return VirtualCluster(uid="abc123", namespace="team-a", name="dev")
