"""Best-effort public read access: bucket IAM binding plus object ACL."""

import logging

from filestore.providers.storage.base import StorageBackend

logger = logging.getLogger(__name__)

OBJECT_VIEWER_ROLE = "roles/storage.objectViewer"
ALL_USERS = "allUsers"
# Version 3 is required to read and write policies that may carry conditional bindings
POLICY_VERSION = 3


def has_public_read(bindings) -> bool:
    """True if a binding grants the object viewer role to allUsers (role and member must both match)."""
    for binding in bindings or []:
        if binding.get("role") == OBJECT_VIEWER_ROLE and ALL_USERS in (binding.get("members") or ()):
            return True
    return False


class PublicAccessReconciler:
    """Ensures anonymous read on uploaded objects without dropping other grants. Never raises."""

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    async def ensure_public_read(self, key: str) -> bool:
        """
        Add the allUsers objectViewer binding if missing, then make the object public.
        Returns False (and logs a warning) when either step fails, e.g. under uniform
        bucket-level access; callers must not treat the URL as publicly reachable.
        """
        try:
            policy = await self._backend.get_iam_policy(requested_policy_version=POLICY_VERSION)
            policy.version = POLICY_VERSION
            if not has_public_read(policy.bindings):
                policy.bindings.append({"role": OBJECT_VIEWER_ROLE, "members": {ALL_USERS}})
                await self._backend.set_iam_policy(policy)
                logger.info("Added %s binding for %s on bucket %s", OBJECT_VIEWER_ROLE, ALL_USERS, self._backend.bucket_name)
            await self._backend.make_public(key)
            return True
        except Exception as e:
            logger.warning("Failed to apply public access policy for %s: %s", key, e)
            return False
