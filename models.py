from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

IMDS_BASE = "http://169.254.169.254"
META_DATA_URL = f"{IMDS_BASE}/latest/meta-data"


class MetadataField(Enum):
    INSTANCE_ID = f"{META_DATA_URL}/instance-id"
    AMI_ID = f"{META_DATA_URL}/ami-id"
    ACCOUNT_ID = f"{META_DATA_URL}/identity-credentials/ec2/info"
    AVAILABILITY_ZONE = f"{META_DATA_URL}/placement/availability-zone"
    INSTANCE_TYPE = f"{META_DATA_URL}/instance-type"
    HOSTNAME = f"{META_DATA_URL}/hostname"
    LOCAL_HOSTNAME = f"{META_DATA_URL}/local-hostname"
    PUBLIC_HOSTNAME = f"{META_DATA_URL}/public-hostname"

    @property
    def url(self) -> str:
        return self.value


@dataclass(frozen=True)
class InstanceMetadata:
    """
    Instance metadata fetched from IMDS. Every field is always available
    except public_hostname, which is None unless the instance is configured
    to have one assigned.
    """

    region: str
    availability_zone: str
    instance_id: str
    # marked Internal Only by AWS
    account_id: str
    ami_id: str
    instance_type: str
    hostname: str
    local_hostname: str
    public_hostname: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return repr(self)
