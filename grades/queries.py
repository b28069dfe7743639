# Django imports
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

# Import from our other apps
from basic.models import Assignment, Participant, Team, SignUpTopic
from basic.models import SignedUpTeam
from rubric.models import AssignmentQuestionnaire, ResponseMap, Response

# Imports from this app
from .models import ParticipantScore
from .exceptions import NotFound, PersistenceError

# Python imports
import decimal

# Logging
import logging
logger = logging.getLogger(__name__)


def find_assignment(assignment_id):
    try:
        return Assignment.objects.get(id=assignment_id)
    except (Assignment.DoesNotExist, ValueError, TypeError):
        raise NotFound('Assignment', assignment_id)


def find_participant(participant_id):
    try:
        return Participant.objects.select_related('assignment', 'person')\
                                                       .get(id=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise NotFound('Assignment participant', participant_id)


def participants_of(assignment):
    return assignment.participants.select_related('person').order_by('id')


def questionnaires_of(assignment, topic_specific=True):
    """
    The questionnaires linked to the ``assignment``, each one only once, in
    the order they were linked. Set ``topic_specific`` to False to leave out
    the questionnaires that only apply to one topic.
    """
    links = AssignmentQuestionnaire.objects.filter(assignment=assignment)\
                                .select_related('questionnaire').order_by('id')
    if not(topic_specific):
        links = links.filter(topic__isnull=True)

    questionnaires = []
    seen = set()
    for link in links:
        if link.questionnaire_id in seen:
            continue
        seen.add(link.questionnaire_id)
        questionnaires.append(link.questionnaire)
    return questionnaires


def assignment_questionnaire_link(assignment_id, questionnaire_id):
    """ The first link between the two; ``None`` if they are not linked."""
    return assignment_questionnaire_links(assignment_id,
                                          questionnaire_id).first()


def assignment_questionnaire_links(assignment_id, questionnaire_id):
    return AssignmentQuestionnaire.objects.filter(
                                        assignment_id=assignment_id,
                                        questionnaire_id=questionnaire_id)\
                                           .order_by('used_in_round', 'id')


def score_records_of(participant, assignment):
    return ParticipantScore.objects.filter(participant=participant,
                                           assignment=assignment)\
                        .select_related('question')\
                        .order_by('round', 'question__seq', 'id')


def team_of(participant):
    return participant.team


def signed_up_topic_id_for(assignment, team):
    """
    The topic ``team`` signed up for in ``assignment``; ``None`` if the team
    is missing, only wait-listed, or signed up in another assignment.
    """
    if team is None:
        return None
    topic_id = SignedUpTeam.topic_id_by_team_id(team.id)
    if topic_id is None:
        return None
    if not SignUpTopic.objects.filter(id=topic_id,
                                      assignment=assignment).exists():
        return None
    return topic_id


def topic_questionnaire(assignment, topic_id):
    """ The questionnaire used to review work on the given topic, or None."""
    link = AssignmentQuestionnaire.objects.filter(assignment=assignment,
                                                  topic_id=topic_id)\
                                .select_related('questionnaire').order_by('id')\
                                .first()
    if link:
        return link.questionnaire
    else:
        return None


def microtask_topic(assignment, team):
    """
    The topic that sets the micropayment: the team's own topic, else the
    first topic of the assignment.
    """
    topics = SignUpTopic.objects.filter(assignment=assignment).order_by('id')
    topic_id = signed_up_topic_id_for(assignment, team)
    if topic_id is not None:
        return topics.get(id=topic_id)
    return topics.first()


def unsubmitted_self_review(participant):
    """
    True if the participant has not (yet) submitted their most recent self
    review; also True if there is no self review at all.
    """
    mapping = ResponseMap.objects.filter(reviewer=participant,
                                         map_type='self_review')\
                                                        .order_by('id').first()
    if mapping is None:
        return True
    response = latest_response(mapping)
    if response is None:
        return True
    return not(response.is_submitted)


def latest_response(mapping):
    return Response.objects.filter(map=mapping).order_by('-id').first()


def find_or_create_review_mapping(participant, person):
    """
    From a given ``participant`` we find (or create) the assignment
    participant for ``person`` who will review the team of that participant.
    The handle is set if it is a new record. Then we find or create the
    review mapping between the two.

    Returns the mapping, and whether it was just created.
    """
    reviewer, created = Participant.objects.get_or_create(
                                        person=person,
                                        assignment=participant.assignment)
    if created:
        reviewer.set_handle()
        reviewer.save()
        logger.debug('Created reviewer participant {0}'.format(reviewer))

    reviewee = team_of(participant)
    if reviewee is None:
        raise NotFound('Team for assignment participant', participant.id)

    return ResponseMap.objects.get_or_create(
                                        reviewee=reviewee,
                                        reviewer=reviewer,
                                        reviewed_object=participant.assignment,
                                        map_type='review')


def set_participant_override_grade(participant_id, grade):
    """
    Sets (or clears, if ``grade`` is None) the instructor's grade.
    """
    participant = find_participant(participant_id)
    participant.grade = grade
    try:
        with transaction.atomic():
            participant.save(update_fields=['grade'])
    except (DatabaseError, ValidationError, decimal.InvalidOperation,
            ValueError, TypeError) as err:
        logger.error('Grade not saved for participant {0}: {1}'.format(
                                                        participant_id, err))
        raise PersistenceError(('Error occurred while updating grade for '
                                'participant {0}').format(participant_id),
                               str(err))
    participant.refresh_from_db()
    return participant


def set_team_submission_grade_and_comment(team_id, grade, comment):
    try:
        team = Team.objects.get(id=team_id)
    except (Team.DoesNotExist, ValueError, TypeError):
        raise NotFound('Team', team_id)

    team.grade_for_submission = grade
    team.comment_for_submission = comment
    try:
        with transaction.atomic():
            team.save()
    except (DatabaseError, ValidationError, decimal.InvalidOperation,
            ValueError, TypeError) as err:
        logger.error('Submission grade not saved for team {0}: {1}'.format(
                                                               team_id, err))
        raise PersistenceError(('Error occurred while updating grade for '
                                'team {0}').format(team_id), str(err))
    team.refresh_from_db()
    return team
