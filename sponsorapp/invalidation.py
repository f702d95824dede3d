"""
sponsorapp/invalidation.py - Which views go stale when an entity changes

VIEWS maps an entity kind to the paths displaying it. Paths with a
placeholder are only emitted when the matching id is supplied, e.g.
invalidate('sponsor', sponsor_id=...) also hits the sponsor detail page.
"""

import logging
import string

from blinker import Namespace

logger = logging.getLogger(__name__)

_signals = Namespace()

# Receivers get sender=<path>
views_invalidated = _signals.signal('views-invalidated')

VIEWS = {
    'tier': (
        '/manage/tiers',
        '/sponsors',
        '/sponsors-tiers',
    ),
    'sponsor': (
        '/sponsors',
        '/sponsors-tiers',
        '/manage/event-sponsors',
        '/sponsor/{sponsor_id}',
    ),
    'event': (
        '/events',
        '/manage/event-sponsors',
        '/event/{event_id}',
    ),
    'event_sponsor': (
        '/manage/event-sponsors',
        '/events',
        '/event/{event_id}',
        '/sponsor/{sponsor_id}',
    ),
    'user_approval': (
        '/manage/user-approvals',
        '/manage/users',
    ),
    'user_role': (
        '/manage/user-roles',
        '/manage/users',
    ),
}


def _placeholders(template):
    return {name for _, name, _, _ in string.Formatter().parse(template) if name}


def affected_paths(entity, **ids):
    paths = []
    for template in VIEWS[entity]:
        needed = _placeholders(template)
        if needed and not needed.issubset(ids):
            continue
        paths.append(template.format(**ids))
    return paths


def invalidate(entity, **ids):
    """Emit one invalidation per affected view path. Returns the paths."""
    paths = affected_paths(entity, **ids)
    for path in paths:
        logger.debug("Invalidating %s (%s changed)", path, entity)
        views_invalidated.send(path)
    return paths
