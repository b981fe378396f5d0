from datetime import timedelta

from extensions import db, mail
from villa.models.blocked_date import BlockedDate
from villa.models.booking import Booking, BookingStatus, BookingType
from villa.models.user import User


def make_booking(user, **fields):
    booking = Booking(user_id=user.id, status=BookingStatus.PENDING, property_name='Luxury Villa', **fields)
    db.session.add(booking)
    db.session.commit()
    return booking


def test_admin_routes_require_admin(client, guest_headers):
    assert client.get('/api/admin/dashboard').status_code == 401
    assert client.get('/api/admin/dashboard', headers=guest_headers).status_code == 403


def test_dashboard_statistics(client, admin_headers, guest, future):
    make_booking(guest, type=BookingType.STAY, check_in=future, check_out=future + timedelta(days=2), guests=2)
    make_booking(guest, type=BookingType.VIEWING, date=future + timedelta(days=10), time='1:00 PM')
    cancelled = make_booking(guest, type=BookingType.VIEWING, date=future + timedelta(days=11))
    cancelled.status = BookingStatus.CANCELLED
    db.session.commit()

    body = client.get('/api/admin/dashboard', headers=admin_headers).get_json()

    stats = body['statistics']
    assert stats['total_bookings'] == 3
    assert stats['pending_bookings'] == 2
    assert stats['cancelled_bookings'] == 1
    assert stats['stay_bookings'] == 1
    assert stats['viewing_bookings'] == 2
    assert stats['total_users'] == 2
    assert stats['admin_users'] == 1
    assert len(body['recent_bookings']) == 3


def test_list_bookings_with_search(client, admin_headers, guest, future):
    make_booking(guest, type=BookingType.VIEWING, date=future, notes='Interested in the wine cellar')
    make_booking(guest, type=BookingType.STAY, check_in=future + timedelta(days=3),
                 check_out=future + timedelta(days=4), guests=4)

    body = client.get('/api/admin/bookings?search=wine', headers=admin_headers).get_json()
    assert body['total'] == 1
    assert body['bookings'][0]['user']['email'] == 'user@example.com'

    body = client.get('/api/admin/bookings?type=stay&status=pending', headers=admin_headers).get_json()
    assert [b['guests'] for b in body['bookings']] == [4]


def test_confirm_booking_notifies_owner(client, admin_headers, guest, guest_headers, future):
    booking = make_booking(guest, type=BookingType.VIEWING, date=future, time='11:00 AM')

    with mail.record_messages() as outbox:
        response = client.put(f'/api/admin/bookings/{booking.id}', headers=admin_headers,
                              json={'status': 'confirmed'})

    assert response.status_code == 200
    assert response.get_json()['booking']['status'] == 'confirmed'
    assert response.get_json()['booking']['updated_at'] is not None
    assert len(outbox) == 1
    assert outbox[0].recipients == ['user@example.com']

    me = client.get('/api/auth/me', headers=guest_headers).get_json()['user']
    assert me['has_booking_updates'] is True
    assert me['has_notifications'] is True

    seen = client.post('/api/users/me/notifications/seen', headers=guest_headers).get_json()['user']
    assert seen['has_booking_updates'] is False
    assert seen['has_notifications'] is False


def test_admin_date_edit_checks_other_bookings(client, admin_headers, guest, other_guest, future):
    first = make_booking(guest, type=BookingType.STAY, check_in=future, check_out=future + timedelta(days=2),
                         guests=2)
    second = make_booking(other_guest, type=BookingType.STAY, check_in=future + timedelta(days=5),
                          check_out=future + timedelta(days=6), guests=2)

    # Shifting within its own span never conflicts with itself
    ok = client.put(f'/api/admin/bookings/{first.id}', headers=admin_headers,
                    json={'check_out': (future + timedelta(days=3)).isoformat()})
    assert ok.status_code == 200
    assert ok.get_json()['booking']['nights'] == 3

    clash = client.put(f'/api/admin/bookings/{second.id}', headers=admin_headers,
                       json={'check_in': (future + timedelta(days=3)).isoformat()})
    assert clash.status_code == 409
    assert clash.get_json()['date'] == (future + timedelta(days=3)).isoformat()
    assert db.session.get(Booking, second.id).check_in == future + timedelta(days=5)


def test_reactivating_cancelled_booking_is_checked(client, admin_headers, guest, other_guest, future):
    old = make_booking(guest, type=BookingType.VIEWING, date=future)
    old.status = BookingStatus.CANCELLED
    db.session.commit()
    make_booking(other_guest, type=BookingType.VIEWING, date=future, time='4:00 PM')

    response = client.put(f'/api/admin/bookings/{old.id}', headers=admin_headers, json={'status': 'pending'})

    assert response.status_code == 409
    assert db.session.get(Booking, old.id).status == BookingStatus.CANCELLED


def test_admin_can_edit_during_property_freeze(client, admin_headers, guest, future):
    booking = make_booking(guest, type=BookingType.VIEWING, date=future)
    client.put('/api/admin/property-status', headers=admin_headers, json={'type': 'renovation'})

    response = client.put(f'/api/admin/bookings/{booking.id}', headers=admin_headers,
                          json={'date': (future + timedelta(days=1)).isoformat(), 'notes': 'moved'})

    assert response.status_code == 200
    assert response.get_json()['booking']['notes'] == 'moved'


def test_viewing_time_edits_must_name_a_slot(client, admin_headers, guest, future):
    booking = make_booking(guest, type=BookingType.VIEWING, date=future, time='10:00 AM')
    url = f'/api/admin/bookings/{booking.id}'

    assert client.put(url, headers=admin_headers, json={'time': None}).status_code == 400
    assert client.put(url, headers=admin_headers, json={'time': '9:15 PM'}).status_code == 400
    assert db.session.get(Booking, booking.id).time == '10:00 AM'

    response = client.put(url, headers=admin_headers, json={'time': '2:00 PM'})
    assert response.status_code == 200
    assert response.get_json()['booking']['time'] == '2:00 PM'


def test_update_rejects_unknown_fields(client, admin_headers, guest, future):
    booking = make_booking(guest, type=BookingType.VIEWING, date=future)
    response = client.put(f'/api/admin/bookings/{booking.id}', headers=admin_headers, json={'user_id': 99})
    assert response.status_code == 400


def test_admin_cancels_guest_booking(client, admin_headers, guest, future):
    booking = make_booking(guest, type=BookingType.VIEWING, date=future)

    response = client.post(f'/api/bookings/{booking.id}/cancel', headers=admin_headers)

    assert response.status_code == 200
    assert db.session.get(User, guest.id).has_booking_updates is True


def test_blocked_dates_lifecycle(client, admin_headers, future):
    created = client.post('/api/admin/blocked-dates', headers=admin_headers, json={
        'date': future.isoformat(), 'reason': 'private-event', 'note': 'Owner visit',
    })
    assert created.status_code == 201
    blocked = created.get_json()['blocked_date']
    assert blocked['reason'] == 'private-event'

    duplicate = client.post('/api/admin/blocked-dates', headers=admin_headers, json={'date': future.isoformat()})
    assert duplicate.status_code == 409

    selectable = client.get(f'/api/availability/selectable?date={future.isoformat()}')
    assert selectable.get_json()['selectable'] is False

    listed = client.get('/api/admin/blocked-dates', headers=admin_headers).get_json()['blocked_dates']
    assert [b['date'] for b in listed] == [future.isoformat()]

    removed = client.delete(f"/api/admin/blocked-dates/{blocked['id']}", headers=admin_headers)
    assert removed.status_code == 200
    assert BlockedDate.query.count() == 0

    selectable = client.get(f'/api/availability/selectable?date={future.isoformat()}')
    assert selectable.get_json()['selectable'] is True

    assert client.delete(f"/api/admin/blocked-dates/{blocked['id']}", headers=admin_headers).status_code == 404


def test_block_date_defaults_reason(client, admin_headers, future):
    response = client.post('/api/admin/blocked-dates', headers=admin_headers, json={'date': future.isoformat()})
    assert response.get_json()['blocked_date']['reason'] == 'maintenance'
    assert client.post('/api/admin/blocked-dates', headers=admin_headers, json={}).status_code == 400


def test_property_status_update(client, admin_headers):
    response = client.put('/api/admin/property-status', headers=admin_headers, json={
        'type': 'seasonal-closure', 'reason': 'Winter',
    })

    assert response.status_code == 200
    status = response.get_json()['property_status']
    assert status['type'] == 'seasonal-closure'
    assert status['is_available'] is False
    assert status['updated_at'] is not None

    public = client.get('/api/availability/status').get_json()['property_status']
    assert public['reason'] == 'Winter'

    bad = client.put('/api/admin/property-status', headers=admin_headers, json={'type': 'closed'})
    assert bad.status_code == 400


def test_calendar_splits_booked_and_blocked(client, admin_headers, guest, future):
    make_booking(guest, type=BookingType.STAY, check_in=future, check_out=future + timedelta(days=1), guests=2)
    client.post('/api/admin/blocked-dates', headers=admin_headers, json={'date': (future + timedelta(days=3)).isoformat()})

    response = client.get(f'/api/admin/calendar?start={future.isoformat()}'
                          f'&end={(future + timedelta(days=7)).isoformat()}', headers=admin_headers)

    body = response.get_json()
    assert body['booked_dates'] == [future.isoformat(), (future + timedelta(days=1)).isoformat()]
    assert [b['date'] for b in body['blocked_dates']] == [(future + timedelta(days=3)).isoformat()]
    assert len(body['unavailable_dates']) == 3


def test_user_management(client, admin, admin_headers, guest):
    users = client.get('/api/admin/users?role=user', headers=admin_headers).get_json()['users']
    assert [u['email'] for u in users] == ['user@example.com']

    promoted = client.post(f'/api/admin/users/{guest.id}/toggle-admin', headers=admin_headers)
    assert promoted.get_json()['user']['is_admin'] is True

    deactivated = client.post(f'/api/admin/users/{guest.id}/toggle-status', headers=admin_headers)
    assert deactivated.get_json()['user']['status'] == 'inactive'

    inactive = client.get('/api/admin/users?status=inactive', headers=admin_headers).get_json()['users']
    assert [u['id'] for u in inactive] == [guest.id]

    assert client.post(f'/api/admin/users/{admin.id}/toggle-admin', headers=admin_headers).status_code == 403
    assert client.post(f'/api/admin/users/{admin.id}/toggle-status', headers=admin_headers).status_code == 403
    assert client.post('/api/admin/users/999/toggle-status', headers=admin_headers).status_code == 404


def test_deactivated_user_token_stops_working(client, admin_headers, guest, guest_headers):
    client.post(f'/api/admin/users/{guest.id}/toggle-status', headers=admin_headers)
    assert client.get('/api/auth/me', headers=guest_headers).status_code == 401
