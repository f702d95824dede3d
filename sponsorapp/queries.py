"""
sponsorapp/queries.py - Read-only projections for the pages

Joins are composed here from plain selects. No business rules.
"""

from datetime import date


def _by_id(rows):
    return {row['id']: row for row in rows}


def _date(value):
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def tiers_by_level(backend):
    return backend.select('tiers', order_by=[('level', True)])


def sponsors_with_tiers(backend, tier_id=None, fulfilled=None, search=None):
    """All sponsors (name ascending), each with its 'tier' row attached."""
    where = {}
    if tier_id:
        where['tier_id'] = tier_id
    if fulfilled is not None:
        where['fulfilled'] = fulfilled

    sponsors = backend.select('sponsors', where=where or None, order_by=[('name', True)])
    if search:
        needle = search.lower()
        sponsors = [s for s in sponsors if needle in s['name'].lower()]

    tiers = _by_id(backend.select('tiers', where={'id': {s['tier_id'] for s in sponsors}}))
    for sponsor in sponsors:
        sponsor['tier'] = tiers.get(sponsor['tier_id'])
    return sponsors


def sponsors_grouped_by_tier(backend):
    """[(tier, [sponsors])] ordered by tier level."""
    sponsors = sponsors_with_tiers(backend)
    groups = []
    for tier in tiers_by_level(backend):
        members = [s for s in sponsors if s['tier_id'] == tier['id']]
        groups.append((tier, members))
    return groups


def events_with_sponsors(backend):
    """All events (date descending), each with its 'sponsors' list."""
    events = backend.select('events', order_by=[('date', False)])
    links = backend.select('event_sponsors', 'event_id, sponsor_id',
                           where={'event_id': [e['id'] for e in events]})
    sponsors = _by_id(backend.select('sponsors', 'id, name, logo_url, fulfilled',
                                     where={'id': {link['sponsor_id'] for link in links}}))

    for event in events:
        event['sponsors'] = [sponsors[link['sponsor_id']] for link in links
                             if link['event_id'] == event['id'] and link['sponsor_id'] in sponsors]
    return events


def event_detail(backend, event_id):
    """Event with its sponsors (and their tiers), or None."""
    event = backend.single('events', where={'id': event_id})
    if event is None:
        return None

    links = backend.select('event_sponsors', where={'event_id': event_id},
                           order_by=[('created_at', True)])
    sponsors = _by_id(backend.select('sponsors', where={'id': [link['sponsor_id'] for link in links]}))
    tiers = _by_id(backend.select('tiers', where={'id': {s['tier_id'] for s in sponsors.values()}}))

    event['sponsors'] = []
    for link in links:
        sponsor = sponsors.get(link['sponsor_id'])
        if sponsor:
            sponsor['tier'] = tiers.get(sponsor['tier_id'])
            sponsor['linked_at'] = link['created_at']
            event['sponsors'].append(sponsor)
    return event


def sponsor_detail(backend, sponsor_id):
    """Sponsor with its tier and events, or None."""
    sponsor = backend.single('sponsors', where={'id': sponsor_id})
    if sponsor is None:
        return None

    sponsor['tier'] = backend.single('tiers', where={'id': sponsor['tier_id']})
    links = backend.select('event_sponsors', 'event_id', where={'sponsor_id': sponsor_id})
    sponsor['events'] = backend.select('events', 'id, title, date, details',
                                       where={'id': [link['event_id'] for link in links]},
                                       order_by=[('date', False)])
    return sponsor


def tier_overview(backend):
    """Tiers by level with a 'sponsor_count' each."""
    tiers = tiers_by_level(backend)
    sponsors = backend.select('sponsors', 'tier_id')
    for tier in tiers:
        tier['sponsor_count'] = sum(1 for s in sponsors if s['tier_id'] == tier['id'])
    return tiers


def event_sponsor_management(backend):
    events = backend.select('events', order_by=[('date', True)])
    sponsors = backend.select('sponsors', order_by=[('name', True)])
    links = backend.select('event_sponsors', 'event_id, sponsor_id', order_by=[('event_id', True)])

    titles = {e['id']: e['title'] for e in events}
    names = {s['id']: s['name'] for s in sponsors}
    pairs = [
        {
            'event_id': link['event_id'],
            'sponsor_id': link['sponsor_id'],
            'event_title': titles[link['event_id']],
            'sponsor_name': names[link['sponsor_id']],
        }
        for link in links
        if link['event_id'] in titles and link['sponsor_id'] in names
    ]
    return {'events': events, 'sponsors': sponsors, 'links': pairs}


def pending_users(backend):
    return backend.select('user_profiles',
                          'user_id, full_name, email, role, created_at, is_approved',
                          where={'is_approved': False},
                          order_by=[('created_at', True)])


def approved_user_count(backend):
    return len(backend.select('user_profiles', 'user_id', where={'is_approved': True}))


def role_candidates(backend, caller_id):
    """Approved users other than the caller, by role then name."""
    return backend.select('user_profiles',
                          'user_id, full_name, email, role, is_approved, created_at',
                          where={'is_approved': True},
                          exclude={'user_id': caller_id},
                          order_by=[('role', True), ('full_name', True)])


def all_users(backend):
    return backend.select('user_profiles', order_by=[('created_at', False)])


def dashboard(backend, caller, upcoming_limit=5):
    events = backend.select('events', 'id, title, date', order_by=[('date', True)])
    sponsors = backend.select('sponsors', 'id, fulfilled')
    today = date.today()

    stats = {
        'total_events': len(events),
        'total_sponsors': len(sponsors),
        'fulfilled_sponsors': sum(1 for s in sponsors if s['fulfilled']),
        'total_tiers': len(backend.select('tiers', 'id')),
        'pending_users': None,
    }
    if caller.role in ('manager', 'admin'):
        stats['pending_users'] = len(backend.select('user_profiles', 'user_id',
                                                    where={'is_approved': False}))

    upcoming = [e for e in events if _date(e['date']) >= today][:upcoming_limit]
    return stats, upcoming
