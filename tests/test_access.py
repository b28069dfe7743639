"""
Test: the access predicates for the grades actions.
"""
import pytest

from basic.models import Person, TeamMembership
from rubric.models import ResponseMap, Response
from grades import access
from grades.access import ActorContext


pytestmark = pytest.mark.django_db


def actor_for(person):
    return ActorContext(user_id=person.id, role=person.role)


class TestActorContext:
    def test_privilege_ordering(self):
        actor = ActorContext(user_id=1, role=Person.INSTRUCTOR)
        assert actor.has_privilege_at_least(Person.STUDENT)
        assert actor.has_privilege_at_least(Person.TA)
        assert actor.has_privilege_at_least(Person.INSTRUCTOR)
        assert not actor.has_privilege_at_least(Person.ADMIN)

    def test_anonymous_has_no_privileges(self):
        actor = ActorContext()
        assert not actor.is_authenticated
        assert not actor.has_privilege_at_least(Person.STUDENT)
        assert not actor.is_a(Person.STUDENT)

    def test_unknown_role(self):
        assert not ActorContext(user_id=1, role='Guest')\
                                        .has_privilege_at_least(Person.STUDENT)
        assert not ActorContext(user_id=1, role=Person.ADMIN)\
                                        .has_privilege_at_least('Guest')

    def test_from_request(self, rf, student):
        request = rf.get('/')
        request.session = {'user_id': student.id}
        actor = access.actor_from_request(request)
        assert actor.user_id == student.id
        assert actor.role == Person.STUDENT

    def test_from_request_without_user(self, rf):
        request = rf.get('/')
        request.session = {}
        assert not access.actor_from_request(request).is_authenticated

    def test_from_request_unknown_user(self, rf):
        request = rf.get('/')
        request.session = {'user_id': 9999}
        assert not access.actor_from_request(request).is_authenticated


class TestAggregateReport:
    def test_staff_allowed(self, ta, instructor):
        assert access.can_view_aggregate_report(actor_for(ta))
        assert access.can_view_aggregate_report(actor_for(instructor))

    def test_student_denied(self, student):
        assert not access.can_view_aggregate_report(actor_for(student))


class TestOwnTeam:
    def test_student_sees_own_team(self, student, participant):
        assert access.can_view_own_team(actor_for(student), participant)

    def test_student_denied_other_team(self, other_student, participant):
        assert not access.can_view_own_team(actor_for(other_student),
                                            participant)

    def test_ta_sees_any_team(self, ta, participant):
        assert access.can_view_own_team(actor_for(ta), participant)

    def test_anonymous_denied(self, participant):
        assert not access.can_view_own_team(ActorContext(), participant)


class TestOwnScores:
    def test_student_sees_own_scores(self, student, participant):
        assert access.can_view_own_scores(actor_for(student), participant)

    def test_other_student_denied(self, other_student, participant):
        assert not access.can_view_own_scores(actor_for(other_student),
                                              participant)

    @pytest.mark.parametrize('authorization', ['reader', 'reviewer'])
    def test_restricted_authorization_denied(self, student, participant,
                                             authorization):
        participant.authorization = authorization
        participant.save()
        assert not access.can_view_own_scores(actor_for(student), participant)

    def test_teammate_allowed_on_team_assignment(self, other_student,
                                                 participant, team):
        participant.assignment.max_team_size = 3
        participant.assignment.save()
        TeamMembership.objects.create(team=team, person=other_student)
        assert access.can_view_own_scores(actor_for(other_student),
                                          participant)

    def test_self_review_must_be_submitted(self, student, participant, team):
        assignment = participant.assignment
        assignment.is_selfreview_enabled = True
        assignment.save()
        actor = actor_for(student)
        assert not access.can_view_own_scores(actor, participant)

        mapping = ResponseMap.objects.create(reviewed_object=assignment,
                                             reviewer=participant,
                                             reviewee=team,
                                             map_type='self_review')
        response = Response.objects.create(map=mapping, is_submitted=False)
        assert not access.can_view_own_scores(actor, participant)

        response.is_submitted = True
        response.save()
        assert access.can_view_own_scores(actor, participant)


class TestActionAllowed:
    def test_dispatch(self, student, ta, participant):
        assert access.action_allowed(actor_for(student), 'view_my_scores',
                                     participant)
        assert access.action_allowed(actor_for(student), 'view_team',
                                     participant)
        assert not access.action_allowed(actor_for(student), 'view')
        assert not access.action_allowed(actor_for(student), 'edit')
        assert access.action_allowed(actor_for(ta), 'edit')

    def test_participant_actions_need_participant(self, student):
        assert not access.action_allowed(actor_for(student), 'view_team')
        assert not access.action_allowed(actor_for(student), 'view_my_scores')
