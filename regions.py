"""
Known AWS region codes used to derive the region from an availability zone.

IMDS gives no authoritative region list, so this table is maintained by hand
and has to be updated whenever AWS launches a region. Bump REGIONS_REVISION
when it changes.
"""
from errors import UnknownAvailabilityZoneError

REGIONS_REVISION = 1

REGIONS = (
    "ap-south-1",
    "eu-west-3",
    "eu-north-1",
    "eu-west-2",
    "eu-west-1",
    "ap-northeast-3",
    "ap-northeast-2",
    "ap-northeast-1",
    "sa-east-1",
    "ca-central-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "eu-central-1",
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    # China partition
    "cn-north-1",
    "cn-northwest-1",
)


def availability_zone_to_region(availability_zone: str) -> str:
    """Return the region whose code prefixes the zone, e.g. us-east-1a -> us-east-1."""
    for region in REGIONS:
        if availability_zone.startswith(region):
            return region
    raise UnknownAvailabilityZoneError(availability_zone)
