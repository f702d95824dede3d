from sponsorapp import create_app
from sponsorapp.invalidation import VIEWS, affected_paths, invalidate, views_invalidated


def test_detail_paths_need_their_id():
    assert affected_paths('sponsor') == ['/sponsors', '/sponsors-tiers', '/manage/event-sponsors']
    assert '/sponsor/s-1' in affected_paths('sponsor', sponsor_id='s-1')


def test_link_change_hits_both_detail_pages():
    paths = affected_paths('event_sponsor', event_id='e-1', sponsor_id='s-1')
    assert '/event/e-1' in paths
    assert '/sponsor/s-1' in paths
    assert '/manage/event-sponsors' in paths


def test_invalidate_emits_one_signal_per_path(invalidated):
    paths = invalidate('tier')
    assert invalidated == paths == list(VIEWS['tier'])


def test_user_changes_refresh_admin_listings():
    assert '/manage/user-approvals' in affected_paths('user_approval')
    assert '/manage/user-roles' in affected_paths('user_role')


def test_creating_apps_adds_no_receivers(backend):
    before = len(views_invalidated.receivers)

    create_app('testing', backend=backend)
    create_app('testing', backend=backend)

    assert len(views_invalidated.receivers) == before
