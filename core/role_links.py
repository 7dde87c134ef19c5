"""
Linking of OCM and user role ARNs to organizations and accounts.

Linked ARNs are stored as one comma-joined OCM label per owner:
'sts_ocm_role' on the organization, 'sts_user_role' on the account. Updates
are read-modify-write without any concurrency control; a concurrent writer
between the read and the write can lose an update.
"""

from typing import List, Tuple

from models.errors import AccountAlreadyLinkedError, RoleNotLinkedError
from models.iam import LinkedRoleLabel, RoleKind
from utils.arn_utils import get_account_id, parse_arn


class RoleLinkRegistry:
    """Reads and updates linked role labels through the OCM client."""

    def __init__(self, ocm_client):
        self.ocm_client = ocm_client

    def _read(self, kind: RoleKind, owner_id: str) -> Tuple[LinkedRoleLabel, bool]:
        """Return the parsed label and whether it exists remotely."""
        value = self.ocm_client.get_label(kind.owner_kind, owner_id, kind.label_key)
        return LinkedRoleLabel.parse(kind.label_key, value), value is not None

    def _write(self, kind: RoleKind, owner_id: str, label: LinkedRoleLabel, exists: bool):
        if exists:
            self.ocm_client.update_label(kind.owner_kind, owner_id, label.key, label.serialize())
        else:
            self.ocm_client.add_label(kind.owner_kind, owner_id, label.key, label.serialize())

    def _unlink(self, kind: RoleKind, owner_id: str, role_arn: str, not_linked_message: str):
        label, exists = self._read(kind, owner_id)
        if not label.contains(role_arn):
            raise RoleNotLinkedError(not_linked_message, owner_id, role_arn)

        label.role_arns = [arn for arn in label.role_arns if arn != role_arn]
        if label.is_empty:
            self.ocm_client.delete_label(kind.owner_kind, owner_id, label.key)
        else:
            self.ocm_client.update_label(kind.owner_kind, owner_id, label.key, label.serialize())

    def get_organization_linked_ocm_roles(self, org_id: str) -> List[str]:
        label, _ = self._read(RoleKind.OCM, org_id)
        return label.role_arns

    def get_account_linked_user_roles(self, account_id: str) -> List[str]:
        label, _ = self._read(RoleKind.USER, account_id)
        return label.role_arns

    def check_if_aws_account_exists(self, org_id: str, aws_account_id: str) -> Tuple[bool, str, str]:
        """
        Look for an OCM role linked to an organization from an AWS account.

        Returns:
            Tuple of (exists, current label value, ARN linked for the account)

        Raises:
            InvalidARNError: If a linked value is not an ARN
        """
        label, _ = self._read(RoleKind.OCM, org_id)
        for linked_arn in label.role_arns:
            if get_account_id(linked_arn) == aws_account_id:
                return True, label.serialize(), linked_arn
        return False, label.serialize(), ""

    def check_role_exists(self, org_id: str, role_name: str, aws_account_id: str) -> Tuple[bool, str, str]:
        """
        Check whether a different OCM role is already linked for an AWS account.

        Requesting the role that is already linked is not a conflict.

        Returns:
            Tuple of (conflict, linked role name, linked ARN)
        """
        exists, _, selected_arn = self.check_if_aws_account_exists(org_id, aws_account_id)
        if not exists:
            return False, "", ""
        linked_name = parse_arn(selected_arn).resource.split("/", 1)[-1]
        if linked_name == role_name:
            return False, "", ""
        return True, linked_name, selected_arn

    def link_org_to_role(self, org_id: str, role_arn: str) -> bool:
        """
        Link an OCM role to an organization.

        Only one role can be linked per AWS account per organization.

        Returns:
            True if the label was written, False if the role was already linked

        Raises:
            InvalidARNError: If role_arn is not an ARN
            AccountAlreadyLinkedError: If the AWS account has a different role linked
        """
        aws_account_id = get_account_id(role_arn)
        label, exists = self._read(RoleKind.OCM, org_id)

        for linked_arn in label.role_arns:
            if get_account_id(linked_arn) == aws_account_id:
                if linked_arn != role_arn:
                    raise AccountAlreadyLinkedError(org_id, linked_arn, role_arn)
                return False

        label.role_arns.append(role_arn)
        self._write(RoleKind.OCM, org_id, label, exists)
        return True

    def unlink_ocm_role_from_org(self, org_id: str, role_arn: str):
        """Remove an OCM role from an organization, deleting the label when it empties."""
        self._unlink(RoleKind.OCM, org_id, role_arn,
                     f"Role-arn '{role_arn}' is not linked with the organization account '{org_id}'")

    def link_account_role(self, account_id: str, role_arn: str) -> bool:
        """
        Link a user role to an account.

        Returns:
            True if the label was written, False if the role was already linked
        """
        parse_arn(role_arn)
        label, exists = self._read(RoleKind.USER, account_id)
        if label.contains(role_arn):
            return False

        label.role_arns.append(role_arn)
        self._write(RoleKind.USER, account_id, label, exists)
        return True

    def unlink_user_role_from_account(self, account_id: str, role_arn: str):
        self._unlink(RoleKind.USER, account_id, role_arn,
                     f"Role ARN '{role_arn}' is not linked with the current account '{account_id}'")

    def link(self, kind: RoleKind, owner_id: str, role_arn: str) -> bool:
        if kind == RoleKind.OCM:
            return self.link_org_to_role(owner_id, role_arn)
        return self.link_account_role(owner_id, role_arn)

    def unlink(self, kind: RoleKind, owner_id: str, role_arn: str):
        if kind == RoleKind.OCM:
            self.unlink_ocm_role_from_org(owner_id, role_arn)
        else:
            self.unlink_user_role_from_account(owner_id, role_arn)

    def linked_roles(self, kind: RoleKind, owner_id: str) -> List[str]:
        if kind == RoleKind.OCM:
            return self.get_organization_linked_ocm_roles(owner_id)
        return self.get_account_linked_user_roles(owner_id)
