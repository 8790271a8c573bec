"""
TaxCloud Client Example

Walks through ping, address verification, a lookup and the TIC catalog.
Set TAXCLOUD_API_LOGIN_ID, TAXCLOUD_API_KEY and TAXCLOUD_USPS_USER_ID first.
"""

import asyncio
import os
import sys
import uuid

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import configure_logging
from taxcloud import TaxCloudError, create_taxcloud_client


ORIGIN = {
    "address1": "162 East Avenue",
    "address2": "Third Floor",
    "city": "Norwalk",
    "state": "CT",
    "zipcode": "06851-5715",
}

DESTINATION = {
    "address1": "3121 West Government Way",
    "address2": "Suite 2B",
    "city": "Seattle",
    "state": "WA",
    "zipcode": "98199-1402",
}


async def example_taxcloud_integration():
    """示例：完整的 TaxCloud 集成流程"""
    async with create_taxcloud_client() as client:
        print("=" * 60)
        print("1. Ping")
        print("=" * 60)
        try:
            ok = await client.ping()
        except TaxCloudError as e:
            print(f"✗ Ping failed: {e}")
            return
        print(f"Credentials valid: {ok}\n")

        print("=" * 60)
        print("2. Verify Address")
        print("=" * 60)
        try:
            verified = await client.verify_address(DESTINATION)
            print(f"✓ {verified.address1}, {verified.city} {verified.state} {verified.zipcode}\n")
        except TaxCloudError as e:
            print(f"✗ Verification failed: {e}\n")

        print("=" * 60)
        print("3. Lookup")
        print("=" * 60)
        cart = {
            "id": str(uuid.uuid4()),
            "items": [
                {"id": str(uuid.uuid4()), "tic": "00000", "price": "18.00", "quantity": 1},
                {"id": str(uuid.uuid4()), "tic": "00000", "price": 26.00, "quantity": 2},
            ],
        }
        try:
            result = await client.lookup(str(uuid.uuid4()), cart, ORIGIN, DESTINATION)
            print(f"✓ Cart {result.cart_id}")
            for index, amount in enumerate(result.per_item_tax):
                print(f"  item {index}: {amount}")
            print(f"  total: {result.total_tax}\n")
        except TaxCloudError as e:
            print(f"✗ Lookup failed: {e}\n")

        print("=" * 60)
        print("4. TIC catalog")
        print("=" * 60)
        try:
            codes = await client.fetch_flat_code_list()
            print(f"✓ {len(codes)} codes, first ten: {codes[:10]}")
        except TaxCloudError as e:
            print(f"✗ Catalog fetch failed: {e}")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(example_taxcloud_integration())
