"""
Who may see and change grades.

The predicates only read: the ``ActorContext`` of the request and the
records involved. Turning a ``False`` into a 403 is up to the views.
"""
from basic.models import Person

from . import queries

# Logging
import logging
logger = logging.getLogger(__name__)


class ActorContext(object):
    """ The person making the request, and their role."""
    def __init__(self, user_id=None, role=None):
        self.user_id = user_id
        self.role = role

    @property
    def is_authenticated(self):
        return self.user_id is not None

    def is_a(self, role):
        return self.is_authenticated and self.role == role

    def has_privilege_at_least(self, role):
        required = Person.privilege_of(role)
        if not(self.is_authenticated) or required < 0:
            return False
        return Person.privilege_of(self.role) >= required

    def __repr__(self):
        return 'ActorContext(user_id={0}, role={1!r})'.format(self.user_id,
                                                             self.role)


def actor_from_request(request):
    """
    The session holds the id of the signed-in ``Person`` as ``user_id``.
    An anonymous actor is returned if there is nobody signed in.
    """
    user_id = request.session.get('user_id', None)
    if user_id is None:
        return ActorContext()

    person = Person.objects.filter(id=user_id).first()
    if person is None:
        logger.warning('Session refers to unknown person {0}'.format(user_id))
        return ActorContext()
    return ActorContext(user_id=person.id, role=person.role)


def can_view_aggregate_report(actor):
    return actor.has_privilege_at_least(Person.TA)


def can_view_own_team(actor, participant):
    """
    Students can only see the heat map of their own team.
    """
    if actor.is_a(Person.STUDENT):
        return participant.person_id == actor.user_id
    return actor.has_privilege_at_least(Person.TA)


def are_needed_authorizations_present(participant, *authorizations):
    """
    False if the participant only has one of the given (restricted)
    ``authorizations``, e.g. is only a reader or only a reviewer.
    """
    return participant.authorization not in authorizations


def is_reader_of(actor, participant):
    """
    For team assignments the actor must be on the participant's team;
    otherwise the actor must be the participant.
    """
    if participant.assignment.max_team_size > 1:
        team = queries.team_of(participant)
        if team is not None:
            return team.has_user(actor.user_id)
    return participant.person_id == actor.user_id


def self_review_finished(participant):
    if not(participant.assignment.is_selfreview_enabled):
        return True
    return not(queries.unsubmitted_self_review(participant))


def can_view_own_scores(actor, participant):
    return actor.has_privilege_at_least(Person.STUDENT) and \
           is_reader_of(actor, participant) and \
           are_needed_authorizations_present(participant,
                                             'reader', 'reviewer') and \
           self_review_finished(participant)


def action_allowed(actor, action, participant=None):
    """
    Decides if ``actor`` may run the grades ``action``. Actions other than
    the two student-facing ones need Teaching Assistant privileges.
    """
    if action == 'view_my_scores':
        return participant is not None and \
               can_view_own_scores(actor, participant)
    elif action == 'view_team':
        return participant is not None and \
               can_view_own_team(actor, participant)
    else:
        return can_view_aggregate_report(actor)
