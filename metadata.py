"""
Client for the EC2 Instance Metadata Service (IMDSv2).

https://docs.aws.amazon.com/AWSEC2/latest/UserGuide/ec2-instance-metadata.html

    client = InstanceMetadataClient()
    instance_metadata = client.get()
"""
import json
import logging
from typing import Optional

import requests

from errors import HttpRequestError, IoError, JsonError, NotFoundError
from models import IMDS_BASE, InstanceMetadata, MetadataField
from regions import availability_zone_to_region

TOKEN_URL = f"{IMDS_BASE}/latest/api/token"
TOKEN_TTL = "21600"  # seconds
TOKEN_TTL_HEADER = "X-aws-ec2-metadata-token-ttl-seconds"
TOKEN_HEADER = "X-aws-ec2-metadata-token"
REQUEST_TIMEOUT = 2.0  # seconds, applied to connect and to each socket read, not the whole request

log = logging.getLogger("imds-client")


def identity_credentials_to_account_id(ident_creds: str) -> str:
    try:
        parsed = json.loads(ident_creds)
    except (ValueError, RecursionError) as e:
        raise JsonError(repr(e)) from e

    account_id = parsed.get("AccountId") if isinstance(parsed, dict) else None
    if not isinstance(account_id, str):
        raise JsonError("Missing AccountId field")
    return account_id


def _read_text(resp: requests.Response) -> str:
    try:
        return resp.text
    except requests.exceptions.RequestException as e:
        raise IoError(repr(e)) from e
    finally:
        resp.close()


class InstanceMetadataClient:
    def __init__(self):
        self.session = requests.Session()
        self.timeout = (REQUEST_TIMEOUT, REQUEST_TIMEOUT)

    def _send(self, method: str, url: str, headers: dict) -> requests.Response:
        resp = self.session.request(method, url, headers=headers, timeout=self.timeout, stream=True)
        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError:
            resp.close()
            raise
        return resp

    def get_token(self) -> str:
        try:
            resp = self._send("PUT", TOKEN_URL, {TOKEN_TTL_HEADER: TOKEN_TTL})
        except requests.exceptions.RequestException as e:
            log.warning("IMDS token request failed: %s", e)
            raise HttpRequestError(repr(e)) from e
        log.debug("Acquired IMDS session token")
        return _read_text(resp)

    def fetch(self, field: MetadataField, token: str, optional: bool = False) -> Optional[str]:
        """
        GET a single metadata field. Any transport failure is reported as
        NotFoundError carrying the field's URL, or as None when optional.
        """
        try:
            resp = self._send("GET", field.url, {TOKEN_HEADER: token})
        except requests.exceptions.RequestException as e:
            if optional:
                log.info("%s not available: %s", field.url, e)
                return None
            log.warning("Failed to fetch %s: %s", field.url, e)
            raise NotFoundError(field.url) from e
        log.debug("Fetched %s", field.url)
        return _read_text(resp)

    def get(self) -> InstanceMetadata:
        """Get the instance metadata for the machine."""
        token = self.get_token()

        instance_id = self.fetch(MetadataField.INSTANCE_ID, token)
        account_id = identity_credentials_to_account_id(self.fetch(MetadataField.ACCOUNT_ID, token))
        ami_id = self.fetch(MetadataField.AMI_ID, token)
        availability_zone = self.fetch(MetadataField.AVAILABILITY_ZONE, token)
        region = availability_zone_to_region(availability_zone)
        instance_type = self.fetch(MetadataField.INSTANCE_TYPE, token)
        hostname = self.fetch(MetadataField.HOSTNAME, token)
        local_hostname = self.fetch(MetadataField.LOCAL_HOSTNAME, token)
        # public-hostname is only assigned when the instance is configured for it
        public_hostname = self.fetch(MetadataField.PUBLIC_HOSTNAME, token, optional=True)

        return InstanceMetadata(
            region=region,
            availability_zone=availability_zone,
            instance_id=instance_id,
            account_id=account_id,
            ami_id=ami_id,
            instance_type=instance_type,
            hostname=hostname,
            local_hostname=local_hostname,
            public_hostname=public_hostname,
        )
