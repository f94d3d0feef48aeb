from fastapi.testclient import TestClient
import pytest

from test.route_constant import ADMIN_EXHIBITIONS, ADMIN_PRICING, EXHIBITIONS
from test.shared.utils import assert_response_status, create_exhibition, create_prices


@pytest.mark.integration
class TestCatalogApi:
    def test_public_listing_shows_only_active_exhibitions(
        self, client: TestClient, admin_headers: dict
    ) -> None:
        # Arrange
        active = create_exhibition(client, admin_headers, name='Ancient Scripts')
        create_exhibition(client, admin_headers, name='Coming Soon', status='draft')

        # Act
        response = client.get(EXHIBITIONS)

        # Assert
        assert_response_status(response, 200)
        assert [e['id'] for e in response.json()] == [active['id']]

    def test_admin_endpoints_require_the_admin_role(
        self, client: TestClient, visitor_headers: dict
    ) -> None:
        assert_response_status(client.get(ADMIN_EXHIBITIONS), 401)
        assert_response_status(client.get(ADMIN_EXHIBITIONS, headers=visitor_headers), 403)

    def test_archived_exhibition_leaves_the_public_catalog(
        self, client: TestClient, admin_headers: dict
    ) -> None:
        # Arrange
        exhibition = create_exhibition(client, admin_headers)

        # Act
        response = client.delete(f'{ADMIN_EXHIBITIONS}/{exhibition["id"]}', headers=admin_headers)

        # Assert
        assert_response_status(response, 200)
        assert response.json()['status'] == 'archived'
        assert_response_status(client.get(f'{EXHIBITIONS}/{exhibition["id"]}'), 404)

    def test_new_price_supersedes_the_active_one(
        self, client: TestClient, admin_headers: dict
    ) -> None:
        """
        Given: An active general adult price of 200.00
        When: An admin sets the adult price to 250.00
        Then: Only the new price is active
        """
        # Arrange
        create_prices(client, admin_headers, prices={'adult': 20000})

        # Act
        create_prices(client, admin_headers, prices={'adult': 25000})

        # Assert
        response = client.get(ADMIN_PRICING, headers=admin_headers)
        assert_response_status(response, 200)
        active = [p for p in response.json() if p['isActive']]
        assert [(p['ticketType'], p['price']) for p in active] == [('adult', 25000)]

    def test_price_for_unknown_exhibition_is_not_found(
        self, client: TestClient, admin_headers: dict
    ) -> None:
        response = client.post(
            ADMIN_PRICING,
            json={
                'ticketType': 'adult',
                'price': 1000,
                'exhibitionId': '01936d8f-5e73-7c4e-a9c5-123456789abc',
            },
            headers=admin_headers,
        )

        assert_response_status(response, 404)
        assert response.json()['detail'] == 'Exhibition not found'
