"""Tests for the application lifecycle and lease scheduling."""

from datetime import UTC, date, datetime

import pytest
from dateutil.relativedelta import relativedelta
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.models.lease import Lease
from app.models.property import Property
from app.schemas.application import ApplicationCreate
from app.services.application import (
    create_application,
    list_applications,
    update_application_status,
)
from app.services.lease import calculate_next_payment_date, new_lease
from tests.factories import MANAGER_ID, TENANT_ID, auth_headers, make_manager, make_property, make_tenant

TODAY = date(2026, 3, 10)


def _application_data(property_id: int, tenant_cognito_id: str = TENANT_ID, **overrides) -> ApplicationCreate:
    fields = {
        "property_id": property_id,
        "tenant_cognito_id": tenant_cognito_id,
        "name": "Taylor Tenant",
        "email": "taylor@example.com",
        "phone_number": "555-0199",
        "message": "I would love to live here.",
    }
    fields.update(overrides)
    return ApplicationCreate(**fields)


def _insert_application_without_lease(db, rental: Property) -> Application:
    application = Application(
        name="Taylor Tenant",
        email="taylor@example.com",
        phone_number="555-0199",
        property_id=rental.id,
        tenant_cognito_id=TENANT_ID,
    )
    db.add(application)
    db.commit()
    return application


@pytest.fixture
def rental(test_db, manager) -> Property:
    """A listing at 1500 a month with a 500 deposit."""
    return make_property(test_db, manager, name="Harbor View", price="1500", deposit="500")


class TestLeaseDates:
    """Lease term and payment schedule arithmetic."""

    def test_next_payment_after_today(self) -> None:
        """The next due date is the first monthly anniversary after today."""
        # Mar 15 is the first start-anchored date after Mar 10
        assert calculate_next_payment_date(date(2023, 1, 15), date(2023, 3, 10)) == date(2023, 3, 15)

    def test_next_payment_strictly_after_today(self) -> None:
        """A payment due today is not the next one."""
        assert calculate_next_payment_date(date(2023, 1, 15), date(2023, 3, 15)) == date(2023, 4, 15)

    def test_next_payment_for_future_start(self) -> None:
        assert calculate_next_payment_date(date(2023, 5, 1), date(2023, 3, 10)) == date(2023, 5, 1)

    def test_month_end_anchoring(self) -> None:
        """A lease starting on the 31st is due at month end, then back on the 31st."""
        start = date(2023, 1, 31)
        assert calculate_next_payment_date(start, date(2023, 2, 1)) == date(2023, 2, 28)
        assert calculate_next_payment_date(start, date(2023, 2, 28)) == date(2023, 3, 31)

    def test_next_payment_crosses_year(self) -> None:
        assert calculate_next_payment_date(date(2023, 11, 30), date(2024, 2, 1)) == date(2024, 2, 29)

    def test_lease_term_from_leap_day(self, rental) -> None:
        """A lease starting on Feb 29 ends on Feb 28 of the next year."""
        assert new_lease(rental, TENANT_ID, today=date(2024, 2, 29)).end_date == date(2025, 2, 28)
        assert new_lease(rental, TENANT_ID, today=date(2023, 6, 1)).end_date == date(2024, 6, 1)


class TestCreateApplication:
    """Submitting an application creates a tentative lease in the same transaction."""

    def test_creates_pending_application_with_lease(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)

        assert application.status == ApplicationStatus.PENDING
        assert application.lease is not None
        assert application.lease.rent == 1500
        assert application.lease.deposit == 500
        assert application.lease.start_date == TODAY
        assert application.lease.end_date == date(2027, 3, 10)
        assert application.lease.tenant_cognito_id == TENANT_ID

    def test_client_status_is_ignored(self, test_db, rental, tenant) -> None:
        """Whatever status the client sends, a new application is Pending."""
        data = ApplicationCreate.model_validate(
            {
                "propertyId": rental.id,
                "tenantCognitoId": TENANT_ID,
                "name": "Taylor",
                "email": "taylor@example.com",
                "phoneNumber": "555",
                "status": "Approved",
            }
        )
        application = create_application(test_db, data, today=TODAY)
        assert application.status == ApplicationStatus.PENDING

    def test_missing_property(self, test_db, tenant) -> None:
        """An unknown property is a 404 and nothing is written."""
        with pytest.raises(NotFoundError):
            create_application(test_db, _application_data(999), today=TODAY)
        assert test_db.query(Application).count() == 0
        assert test_db.query(Lease).count() == 0

    def test_missing_tenant(self, test_db, rental) -> None:
        with pytest.raises(NotFoundError):
            create_application(test_db, _application_data(rental.id, "nobody"), today=TODAY)
        assert test_db.query(Lease).count() == 0

    def test_failed_application_insert_keeps_no_lease(self, test_db, rental, tenant) -> None:
        """If the application row cannot be written, the lease is rolled back too."""
        data = ApplicationCreate.model_construct(
            application_date=None,
            property_id=rental.id,
            tenant_cognito_id=TENANT_ID,
            name=None,
            email="taylor@example.com",
            phone_number="555-0199",
            message=None,
        )
        with pytest.raises(IntegrityError):
            create_application(test_db, data, today=TODAY)
        assert test_db.query(Application).count() == 0
        assert test_db.query(Lease).count() == 0


class TestUpdateApplicationStatus:
    """Manager decisions on pending applications."""

    def test_approve_creates_lease_and_resident(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        tentative_lease_id = application.lease_id

        approved = update_application_status(
            test_db, application.id, ApplicationStatus.APPROVED, today=date(2026, 4, 1)
        )

        assert approved.status == ApplicationStatus.APPROVED
        assert approved.lease_id != tentative_lease_id
        assert approved.lease.start_date == date(2026, 4, 1)
        assert approved.lease.end_date == date(2027, 4, 1)
        assert approved.lease.rent == 1500
        assert tenant in rental.tenants
        # the tentative lease is left in place
        assert test_db.query(Lease).count() == 2

    def test_approval_uses_current_price(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        rental.price_per_month = 1700
        test_db.commit()

        approved = update_application_status(test_db, application.id, ApplicationStatus.APPROVED)
        assert approved.lease.rent == 1700

    def test_approve_twice_is_idempotent(self, test_db, rental, tenant) -> None:
        """Re-approving creates no second lease and no duplicate resident."""
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        first = update_application_status(test_db, application.id, ApplicationStatus.APPROVED)
        lease_id = first.lease_id

        second = update_application_status(test_db, application.id, ApplicationStatus.APPROVED)

        assert second.lease_id == lease_id
        assert test_db.query(Lease).count() == 2
        assert [t.cognito_id for t in rental.tenants] == [TENANT_ID]

    def test_deny_keeps_lease(self, test_db, rental, tenant) -> None:
        """Denial changes only the status."""
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        lease_id = application.lease_id

        denied = update_application_status(test_db, application.id, ApplicationStatus.DENIED)

        assert denied.status == ApplicationStatus.DENIED
        assert denied.lease_id == lease_id
        assert rental.tenants == []
        assert test_db.query(Lease).count() == 1

    def test_decided_application_cannot_change(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        update_application_status(test_db, application.id, ApplicationStatus.DENIED)

        with pytest.raises(ConflictError):
            update_application_status(test_db, application.id, ApplicationStatus.APPROVED)
        assert test_db.query(Lease).count() == 1

    def test_pending_is_not_a_decision(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        with pytest.raises(ValidationError):
            update_application_status(test_db, application.id, ApplicationStatus.PENDING)

    def test_missing_application(self, test_db) -> None:
        with pytest.raises(NotFoundError):
            update_application_status(test_db, 42, ApplicationStatus.APPROVED)

    def test_existing_resident_not_duplicated(self, test_db, rental, tenant) -> None:
        """A tenant approved for a property they already live in stays listed once."""
        rental.tenants.append(tenant)
        test_db.commit()
        application = create_application(test_db, _application_data(rental.id), today=TODAY)

        update_application_status(test_db, application.id, ApplicationStatus.APPROVED)
        assert len(rental.tenants) == 1


class TestListApplications:
    """Dashboard listing with derived payment dates."""

    def test_tenant_listing_with_next_payment(self, test_db, rental, tenant) -> None:
        create_application(test_db, _application_data(rental.id), today=date(2023, 1, 15))

        items = list_applications(test_db, TENANT_ID, "tenant", today=date(2023, 3, 10))

        assert len(items) == 1
        item = items[0]
        assert item.property.address == rental.location.address
        assert item.manager.cognito_id == MANAGER_ID
        assert item.tenant.cognito_id == TENANT_ID
        # first start-anchored due date after Mar 10
        assert item.lease.next_payment_date == date(2023, 3, 15)

    def test_latest_lease_is_reported(self, test_db, rental, tenant) -> None:
        application = create_application(test_db, _application_data(rental.id), today=date(2023, 1, 15))
        update_application_status(test_db, application.id, ApplicationStatus.APPROVED, today=date(2023, 2, 20))

        items = list_applications(test_db, TENANT_ID, "tenant", today=date(2023, 3, 1))
        assert items[0].lease.start_date == date(2023, 2, 20)
        assert items[0].lease.next_payment_date == date(2023, 3, 20)

    def test_application_without_lease(self, test_db, rental, tenant) -> None:
        """An application with no lease on record lists with ``lease`` unset."""
        _insert_application_without_lease(test_db, rental)

        [item] = list_applications(test_db, TENANT_ID, "tenant", today=TODAY)
        assert item.lease is None

    def test_filters_by_manager(self, test_db, rental, tenant) -> None:
        other_manager = make_manager(test_db, "manager-2")
        other = make_property(test_db, other_manager, name="Elsewhere")
        create_application(test_db, _application_data(rental.id), today=TODAY)
        create_application(test_db, _application_data(other.id), today=TODAY)

        mine = list_applications(test_db, MANAGER_ID, "manager", today=TODAY)
        assert [item.property_id for item in mine] == [rental.id]
        assert len(list_applications(test_db, today=TODAY)) == 2

    def test_filters_by_tenant(self, test_db, rental, tenant) -> None:
        make_tenant(test_db, "tenant-2")
        create_application(test_db, _application_data(rental.id), today=TODAY)
        create_application(test_db, _application_data(rental.id, "tenant-2"), today=TODAY)

        items = list_applications(test_db, "tenant-2", "tenant", today=TODAY)
        assert [item.tenant_cognito_id for item in items] == ["tenant-2"]

    def test_unknown_user_type(self, test_db) -> None:
        with pytest.raises(ValidationError):
            list_applications(test_db, "someone", "landlord")


class TestApplicationEndpoints:
    """HTTP surface and role checks."""

    def test_submit_application(self, client: TestClient, test_db, rental, tenant, tenant_headers) -> None:
        """POST /applications returns the application with its tentative lease."""
        response = client.post(
            "/applications",
            headers=tenant_headers,
            json={
                "applicationDate": datetime(2026, 1, 5, tzinfo=UTC).isoformat(),
                "propertyId": rental.id,
                "tenantCognitoId": TENANT_ID,
                "name": "Taylor Tenant",
                "email": "taylor@example.com",
                "phoneNumber": "555-0199",
                "message": "Hello",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Pending"
        assert data["lease"]["rent"] == 1500
        assert data["lease"]["deposit"] == 500
        start = date.fromisoformat(data["lease"]["startDate"])
        assert date.fromisoformat(data["lease"]["endDate"]) == start + relativedelta(years=1)
        assert data["property"]["id"] == rental.id
        assert data["tenant"]["cognitoId"] == TENANT_ID

    def test_submit_requires_tenant_role(self, client: TestClient, rental, tenant, manager_headers) -> None:
        response = client.post("/applications", headers=manager_headers, json={})
        assert response.status_code == 403

    def test_submit_for_missing_property(self, client: TestClient, test_db, tenant, tenant_headers) -> None:
        response = client.post(
            "/applications",
            headers=tenant_headers,
            json={
                "propertyId": 999,
                "tenantCognitoId": TENANT_ID,
                "name": "Taylor",
                "email": "taylor@example.com",
                "phoneNumber": "555",
            },
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Property not found"}
        assert test_db.query(Lease).count() == 0

    def test_submit_invalid_body(self, client: TestClient, tenant_headers) -> None:
        response = client.post("/applications", headers=tenant_headers, json={"propertyId": "x"})
        assert response.status_code == 400
        assert "message" in response.json()

    def test_approve(self, client: TestClient, test_db, rental, tenant, manager_headers) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        tentative_lease_id = application.lease_id

        response = client.put(
            f"/applications/{application.id}/status",
            headers=manager_headers,
            json={"status": "Approved"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Approved"
        assert data["leaseId"] != tentative_lease_id

        residences = client.get(
            f"/tenants/{TENANT_ID}/current-residences", headers=auth_headers("tenant", TENANT_ID)
        )
        assert [p["id"] for p in residences.json()] == [rental.id]

    def test_conflicting_decision(self, client: TestClient, test_db, rental, tenant, manager_headers) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        url = f"/applications/{application.id}/status"

        assert client.put(url, headers=manager_headers, json={"status": "Denied"}).status_code == 200
        assert client.put(url, headers=manager_headers, json={"status": "Denied"}).status_code == 200
        assert client.put(url, headers=manager_headers, json={"status": "Approved"}).status_code == 409

    def test_status_requires_manager(self, client: TestClient, test_db, rental, tenant, tenant_headers) -> None:
        application = create_application(test_db, _application_data(rental.id), today=TODAY)
        response = client.put(
            f"/applications/{application.id}/status",
            headers=tenant_headers,
            json={"status": "Approved"},
        )
        assert response.status_code == 403

    def test_status_missing_application(self, client: TestClient, manager_headers) -> None:
        response = client.put("/applications/77/status", headers=manager_headers, json={"status": "Approved"})
        assert response.status_code == 404
        assert response.json() == {"message": "Application not found."}

    def test_list(self, client: TestClient, test_db, rental, tenant, manager_headers) -> None:
        create_application(test_db, _application_data(rental.id), today=TODAY)

        response = client.get(
            "/applications",
            headers=manager_headers,
            params={"userId": MANAGER_ID, "userType": "manager"},
        )
        assert response.status_code == 200
        [item] = response.json()
        assert item["property"]["address"] == rental.location.address
        assert item["manager"]["cognitoId"] == MANAGER_ID
        assert "nextPaymentDate" in item["lease"]

    def test_list_without_lease(self, client: TestClient, test_db, rental, tenant, tenant_headers) -> None:
        _insert_application_without_lease(test_db, rental)

        response = client.get(
            "/applications",
            headers=tenant_headers,
            params={"userId": TENANT_ID, "userType": "tenant"},
        )
        assert response.status_code == 200
        [item] = response.json()
        assert item["lease"] is None
        assert item["leaseId"] is None

    def test_list_requires_token(self, client: TestClient) -> None:
        assert client.get("/applications").status_code == 401
