"""
OCM REST client for the cluster, inquiry, label and version endpoints the
validators read and write.
"""

import requests
from typing import Any, Dict, List, Optional, Tuple

from models.cluster import Cluster, STSOperator, STSPolicy, VersionRecord
from models.errors import (
    ForbiddenError,
    NotFoundError,
    RemoteServiceError,
    RosaToolsError,
    ValidationError,
)
from utils.validators import is_valid_cluster_key


DEFAULT_URL = "https://api.openshift.com"
DEFAULT_TOKEN_URL = "https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token"
DEFAULT_CLIENT_ID = "cloud-services"
DEFAULT_TIMEOUT = 30
PAGE_SIZE = 100

TERMS_CODE = "CLUSTERS-MGMT-451"
TERMS_MESSAGE = (
    "You must accept the Terms and Conditions in order to continue.\n"
    "Go to https://www.redhat.com/wapps/tnc/ackrequired?site=ocm&event=register\n"
    "Once you accept the terms, you will need to retry the action that was blocked."
)

CLUSTERS_PATH = "/api/clusters_mgmt/v1/clusters"
VERSIONS_PATH = "/api/clusters_mgmt/v1/versions"
STS_POLICIES_PATH = "/api/clusters_mgmt/v1/aws_inquiries/sts_policies"
STS_CRED_REQUESTS_PATH = "/api/clusters_mgmt/v1/aws_inquiries/sts_credential_requests"
CURRENT_ACCOUNT_PATH = "/api/accounts_mgmt/v1/current_account"
ACCOUNTS_MGMT_PATH = "/api/accounts_mgmt/v1"

LABEL_OWNER_KINDS = ("accounts", "organizations")


def handle_err(response: Optional[requests.Response], err: Exception) -> RosaToolsError:
    """
    Build the error for a failed OCM call.

    The service's own reason text is preferred, falling back to the
    transport error. The terms-and-conditions error gets a fixed message.
    """
    status = None
    code = ""
    reason = ""
    if response is not None:
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict):
            reason = body.get('reason', '')
            code = body.get('code', '')

    message = reason or str(err)
    if code == TERMS_CODE:
        message = TERMS_MESSAGE

    if status == 403:
        return ForbiddenError(message, status=status, code=code)
    if status == 404:
        return NotFoundError(message, status=status, code=code)
    return RemoteServiceError(message, status=status, code=code)


class OCMClient:
    """Client for the OCM REST API."""

    def __init__(self, url: str = DEFAULT_URL, token: str = "", session: requests.Session = None,
                 verbose: bool = False, refresh_token: str = "", token_url: str = DEFAULT_TOKEN_URL,
                 client_id: str = DEFAULT_CLIENT_ID, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize OCM client.

        Args:
            url: OCM API URL
            token: Access token; when empty the refresh token is exchanged for one
            session: Session to send requests with (a new one by default)
            verbose: Enable verbose logging
            refresh_token: Refresh or offline token
            token_url: SSO token endpoint used for the exchange
            client_id: SSO client identifier
            timeout: Per-request timeout in seconds
        """
        self.url = url.rstrip('/')
        self.token = token
        self.refresh_token = refresh_token
        self.token_url = token_url
        self.client_id = client_id
        self.timeout = timeout
        self.verbose = verbose
        self.session = session or requests.Session()
        self._setup_session()

    def _setup_session(self):
        """Configure the requests session with appropriate headers."""
        self.session.headers.update({
            'User-Agent': 'rosa-tools/1.0',
            'Accept': 'application/json'
        })

    def log(self, message: str):
        """Print verbose logging messages."""
        if self.verbose:
            print(f"[OCM-CLIENT] {message}")

    def _ensure_token(self):
        if self.token:
            return
        if not self.refresh_token:
            raise ForbiddenError("Not logged in, run 'ocm login' or set OCM_TOKEN")

        self.log(f"Exchanging refresh token at {self.token_url}")
        response = None
        try:
            response = self.session.post(self.token_url, data={
                'grant_type': 'refresh_token',
                'client_id': self.client_id,
                'refresh_token': self.refresh_token
            }, timeout=self.timeout)
            response.raise_for_status()
            self.token = response.json()['access_token']
        except (requests.exceptions.RequestException, KeyError, ValueError) as e:
            raise ForbiddenError(f"Failed to refresh access token: {e}")

    def _request(self, method: str, path: str, params: Dict[str, Any] = None,
                 body: Dict[str, Any] = None, allow_not_found: bool = False) -> Optional[Dict[str, Any]]:
        """
        Send a request and decode the JSON response.

        Returns:
            Response body, or None for an allowed 404 or an empty body

        Raises:
            ForbiddenError, NotFoundError, RemoteServiceError
        """
        self._ensure_token()
        url = f"{self.url}{path}"
        headers = {'Authorization': f"Bearer {self.token}"}
        response = None

        try:
            self.log(f"{method} {path} {params or ''}".rstrip())
            response = self.session.request(
                method, url, params=params, json=body, headers=headers, timeout=self.timeout
            )
            if response.status_code == 404 and allow_not_found:
                self.log(f"{path} not found")
                return None
            response.raise_for_status()
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        except requests.exceptions.RequestException as e:
            error = handle_err(response, e)
            self.log(f"{method} {path} failed: {error}")
            raise error

    def _list(self, path: str, params: Dict[str, Any] = None) -> List[Dict[str, Any]]:
        """Collect every item of a paginated collection."""
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            query = dict(params or {})
            query.update({'page': page, 'size': PAGE_SIZE})
            data = self._request('GET', path, params=query) or {}
            page_items = data.get('items', [])
            items.extend(page_items)
            if len(page_items) < PAGE_SIZE:
                break
            page += 1
        return items

    def get_cluster(self, cluster_key: str) -> Cluster:
        """
        Get a cluster by identifier, external identifier or name.

        Raises:
            ValidationError: If the key contains characters unsafe in a search
            NotFoundError: If no cluster matches
        """
        if not is_valid_cluster_key(cluster_key):
            raise ValidationError(
                f"Cluster name, identifier or external identifier '{cluster_key}' isn't valid: "
                "it must contain only letters, digits, dashes and underscores",
                cluster_key=cluster_key
            )

        search = f"id = '{cluster_key}' or external_id = '{cluster_key}' or name = '{cluster_key}'"
        data = self._request('GET', CLUSTERS_PATH, params={'search': search, 'size': 1}) or {}
        items = data.get('items', [])
        if not items:
            raise NotFoundError(
                f"There is no cluster with identifier or name '{cluster_key}'", cluster_key=cluster_key
            )
        return Cluster.from_ocm(items[0])

    def get_current_account(self) -> Optional[Dict[str, Any]]:
        """Get the account of the logged in user, or None when it does not exist."""
        return self._request('GET', CURRENT_ACCOUNT_PATH, allow_not_found=True)

    def get_current_organization(self) -> Tuple[str, str]:
        """
        Get the organization of the logged in user.

        Returns:
            Tuple of (organization_id, external_id)
        """
        account = self.get_current_account()
        if not account:
            raise NotFoundError("Current account not found")
        organization = account.get('organization', {})
        return organization.get('id', ''), organization.get('external_id', '')

    def get_policies(self, policy_type: str = "") -> Dict[str, STSPolicy]:
        """Get STS policy templates keyed by id, optionally filtered by type."""
        params = {}
        if policy_type:
            params['search'] = f"policy_type = '{policy_type}'"
        return {
            policy.id: policy
            for policy in (STSPolicy.from_ocm(item) for item in self._list(STS_POLICIES_PATH, params))
        }

    def get_cred_requests(self, is_hypershift: bool) -> Dict[str, STSOperator]:
        """Get operator credential requests keyed by request name."""
        items = self._list(STS_CRED_REQUESTS_PATH, {'is_hypershift': str(is_hypershift).lower()})
        return {item.get('name', ''): STSOperator.from_ocm(item.get('operator', {})) for item in items}

    def get_all_cred_requests(self) -> Dict[str, STSOperator]:
        """Merge classic and hosted control plane credential requests; hosted entries win."""
        result = dict(self.get_cred_requests(False))
        result.update(self.get_cred_requests(True))
        return result

    def _label_path(self, owner_kind: str, owner_id: str, key: str = "") -> str:
        if owner_kind not in LABEL_OWNER_KINDS:
            raise ValueError(f"Unsupported label owner kind: {owner_kind}")
        path = f"{ACCOUNTS_MGMT_PATH}/{owner_kind}/{owner_id}/labels"
        return f"{path}/{key}" if key else path

    def get_label(self, owner_kind: str, owner_id: str, key: str) -> Optional[str]:
        """Get a label value from an account or organization, or None when absent."""
        data = self._request('GET', self._label_path(owner_kind, owner_id, key), allow_not_found=True)
        if data is None:
            return None
        return data.get('value', '')

    def add_label(self, owner_kind: str, owner_id: str, key: str, value: str):
        self.log(f"Creating label {key} on {owner_kind}/{owner_id}")
        self._request('POST', self._label_path(owner_kind, owner_id), body={'key': key, 'value': value})

    def update_label(self, owner_kind: str, owner_id: str, key: str, value: str):
        self.log(f"Updating label {key} on {owner_kind}/{owner_id}")
        self._request('PATCH', self._label_path(owner_kind, owner_id, key), body={'key': key, 'value': value})

    def delete_label(self, owner_kind: str, owner_id: str, key: str):
        self.log(f"Deleting label {key} on {owner_kind}/{owner_id}")
        self._request('DELETE', self._label_path(owner_kind, owner_id, key))

    def get_versions(self, channel_group: str = "") -> List[VersionRecord]:
        """Get the enabled ROSA versions, optionally restricted to a channel group."""
        search = "enabled = 'true' and rosa_enabled = 'true'"
        if channel_group:
            search += f" and channel_group = '{channel_group}'"
        items = self._list(VERSIONS_PATH, {'search': search, 'order': 'default desc, id desc'})
        self.log(f"Fetched {len(items)} versions")
        return [VersionRecord.from_ocm(item) for item in items]

    def get_available_upgrades(self, version_id: str) -> List[str]:
        """Get the versions a cluster running a version can upgrade to."""
        data = self._request('GET', f"{VERSIONS_PATH}/{version_id}") or {}
        return data.get('available_upgrades', [])

    def build_cloud_provider_data(self, role_arn: str, aws_client, external_id: str = "") -> Dict[str, Any]:
        """
        Build the cloud provider credentials block for inquiry requests.

        Uses the STS role when a role ARN is supplied, static access keys
        from the AWS client otherwise.
        """
        if role_arn:
            sts = {'role_arn': role_arn}
            if external_id:
                sts['external_id'] = external_id
            return {'aws': {'sts': sts}}

        keys = aws_client.get_access_keys()
        return {
            'aws': {
                'access_key_id': keys.access_key_id,
                'secret_access_key': keys.secret_access_key
            }
        }
