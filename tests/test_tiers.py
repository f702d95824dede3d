from sponsorapp.results import DeniedReason
from sponsorapp.services.tiers import create_tier, update_tier, delete_tier


def test_admin_creates_tier(backend, admin, invalidated):
    result = create_tier(backend, admin, {'name': '  Silver ', 'level': '2', 'description': ' '})

    assert result.ok
    assert result.endpoint == 'manage.tiers'
    [tier] = backend.rows('tiers')
    assert tier['name'] == 'Silver'
    assert tier['level'] == 2
    assert tier['description'] is None
    assert set(invalidated) == {'/manage/tiers', '/sponsors', '/sponsors-tiers'}


def test_manager_cannot_create_tier(backend, manager):
    result = create_tier(backend, manager, {'name': 'Silver', 'level': '2'})

    assert result.reason is DeniedReason.UNAUTHORIZED
    assert backend.rows('tiers') == []


def test_unapproved_admin_cannot_create_tier(backend, caller_for):
    admin_id = backend.add_user('new-admin@example.com', role='admin', is_approved=False)
    result = create_tier(backend, caller_for(admin_id), {'name': 'Silver', 'level': '2'})
    assert result.reason is DeniedReason.UNAUTHORIZED


def test_create_tier_validates_level(backend, admin):
    for level in ('', '0', '-3', 'two'):
        result = create_tier(backend, admin, {'name': 'Silver', 'level': level})
        assert result.reason is DeniedReason.INVALID_INPUT
    assert backend.rows('tiers') == []


def test_create_tier_with_clashing_name_is_silent_noop(backend, admin, tier, invalidated):
    result = create_tier(backend, admin, {'name': 'Gold', 'level': '7'})

    assert result.ok
    assert result.endpoint == 'manage.tiers'
    assert result.message is None
    assert len(backend.rows('tiers')) == 1
    assert invalidated == []


def test_create_tier_with_clashing_level_is_silent_noop(backend, admin, tier):
    result = create_tier(backend, admin, {'name': 'Platinum', 'level': '1'})

    assert result.ok
    assert len(backend.rows('tiers')) == 1


def test_update_tier(backend, admin, tier):
    result = update_tier(backend, admin, {'id': tier['id'], 'name': 'Gold Plus', 'level': '1',
                                          'description': 'Top tier'})

    assert result.ok
    [row] = backend.rows('tiers')
    assert row['name'] == 'Gold Plus'
    assert row['description'] == 'Top tier'


def test_update_tier_ignores_its_own_name_and_level(backend, admin, tier):
    result = update_tier(backend, admin, {'id': tier['id'], 'name': 'Gold', 'level': '1',
                                          'description': 'Same name and level'})
    assert result.ok
    assert backend.rows('tiers')[0]['description'] == 'Same name and level'


def test_update_tier_clash_with_other_tier_is_silent_noop(backend, admin, tier):
    silver = backend.insert('tiers', {'name': 'Silver', 'level': 2})

    result = update_tier(backend, admin, {'id': silver['id'], 'name': 'Silver', 'level': '1'})

    assert result.ok
    assert backend.rows('tiers', id=silver['id'])[0]['level'] == 2


def test_update_missing_tier(backend, admin):
    result = update_tier(backend, admin, {'id': 'nope', 'name': 'Silver', 'level': '2'})
    assert result.reason is DeniedReason.NOT_FOUND


def test_delete_unused_tier(backend, admin, tier):
    result = delete_tier(backend, admin, {'id': tier['id']})

    assert result.ok
    assert backend.rows('tiers') == []


def test_delete_tier_in_use_leaves_everything_unchanged(backend, admin, tier, sponsor, invalidated):
    tiers_before = len(backend.rows('tiers'))
    sponsors_before = len(backend.rows('sponsors'))

    result = delete_tier(backend, admin, {'id': tier['id']})

    assert result.ok
    assert result.endpoint == 'manage.tiers'
    assert len(backend.rows('tiers')) == tiers_before
    assert len(backend.rows('sponsors')) == sponsors_before
    assert invalidated == []


def test_delete_missing_tier(backend, admin):
    assert delete_tier(backend, admin, {'id': 'nope'}).reason is DeniedReason.NOT_FOUND
    assert delete_tier(backend, admin, {}).reason is DeniedReason.INVALID_INPUT


def test_backend_failure_is_reported(backend, admin):
    backend.fail_on.add('insert')
    result = create_tier(backend, admin, {'name': 'Silver', 'level': '2'})
    assert result.reason is DeniedReason.BACKEND_ERROR
    assert result.endpoint == 'main.error'
