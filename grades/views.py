"""
JSON endpoints for viewing and editing grades.

The signed-in person is taken from the session (``user_id``); every view
checks ``access.action_allowed`` before doing any work.
"""
from django.http import JsonResponse, QueryDict
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

# Our imports
from basic.models import Person, Participant
from . import access, queries, scoring
from .exceptions import GradesError, Forbidden, NotFound, PersistenceError

# Python imports
import json
import decimal
import functools

# Logging
import logging
logger = logging.getLogger(__name__)


def json_errors(view):
    """
    Turns the grades errors raised by ``view`` into JSON responses.
    """
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except PersistenceError as err:
            return JsonResponse({'message': err.message, 'error': err.detail},
                                status=err.status)
        except GradesError as err:
            return JsonResponse({'message': err.message}, status=err.status)
    return wrapper


def authorize(actor, action, participant=None):
    if not access.action_allowed(actor, action, participant):
        logger.warning('{0} may not {1}'.format(actor, action))
        raise Forbidden('You are not allowed to {0}.'.format(
                                                    action.replace('_', ' ')))


def request_data(request):
    """
    The fields sent with the request: a JSON body, or a form. Django only
    parses forms sent by POST, so form-encoded PATCH bodies are parsed here.
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body.decode('utf-8') or '{}')
        except ValueError:
            raise GradesError('The request body is not valid JSON.')
        if not isinstance(data, dict):
            raise GradesError('The request body must be a JSON object.')
        return data
    if request.method == 'POST':
        return request.POST
    if request.content_type == 'application/x-www-form-urlencoded':
        return QueryDict(request.body, encoding=request.encoding)
    raise GradesError('Send the fields as JSON or as a form.')


@csrf_exempt
@require_GET
@json_errors
def action_allowed(request, action):
    """
    Can the signed-in person perform ``action``? The participant id is
    given as ``?id=`` for the participant-specific actions.
    """
    actor = access.actor_from_request(request)
    participant = None
    if action in ('view_my_scores', 'view_team'):
        participant = queries.find_participant(request.GET.get('id', None))

    return JsonResponse({'action': action,
                         'allowed': access.action_allowed(actor, action,
                                                          participant)})


@csrf_exempt
@require_GET
@json_errors
def view(request, assignment_id):
    """
    The grading report gives the instructor an overall view of all the grades
    for an assignment: every participant's scores, the team averages and the
    average of those averages.
    """
    actor = access.actor_from_request(request)
    authorize(actor, 'view')
    logger.debug('Grading report for assignment {0} by {1}'.format(
                                                        assignment_id, actor))
    return JsonResponse(scoring.assemble_heat_map(assignment_id))


@csrf_exempt
@require_GET
@json_errors
def view_my_scores(request, participant_id):
    """
    A participant views their own scores, for each round of review.
    """
    actor = access.actor_from_request(request)
    participant = queries.find_participant(participant_id)
    authorize(actor, 'view_my_scores', participant)

    assignment = participant.assignment
    team = queries.team_of(participant)
    questions = scoring.questions_for(assignment, team)
    pscore = scoring.participant_scores(participant, questions)
    logger.debug('Scores for {0} viewed by {1}'.format(participant, actor))

    ctx = {'participant': scoring.serialize_participant(participant),
           'assignment': scoring.serialize_assignment(assignment),
           'team_id': team.id if team else None,
           'topic_id': queries.signed_up_topic_id_for(assignment, team),
           'pscore': scoring.serialize_result(pscore),
           }
    return JsonResponse(ctx)


@csrf_exempt
@require_GET
@json_errors
def view_team(request, participant_id):
    """
    The heat map of the assignment, from the point of view of the
    participant's team. Students only see anonymized reviewers.
    """
    actor = access.actor_from_request(request)
    participant = queries.find_participant(participant_id)
    authorize(actor, 'view_team', participant)

    assignment = participant.assignment
    team = queries.team_of(participant)
    questions = scoring.questions_for(assignment, team)
    redact = actor.is_a(Person.STUDENT)

    ctx = scoring.assemble_heat_map(assignment.id, redact=redact)
    ctx.update({'participant': scoring.serialize_participant(participant),
                'team': scoring.serialize_team(team),
                'questionnaires': scoring.serialize_index(questions),
                'pscore': scoring.serialize_result(
                          scoring.participant_scores(participant, questions)),
                })
    return JsonResponse(ctx)


@csrf_exempt
@require_GET
@json_errors
def edit(request, participant_id):
    """
    Everything needed to edit a participant's grade: all the questions of the
    assignment, and the participant's scores on them.
    """
    actor = access.actor_from_request(request)
    authorize(actor, 'edit')
    participant = queries.find_participant(participant_id)
    assignment = participant.assignment

    questions = scoring.list_questions(assignment)
    scores = scoring.participant_scores(participant, questions)
    ctx = {'participant': scoring.serialize_participant(participant),
           'assignment': scoring.serialize_assignment(assignment),
           'questions': scoring.serialize_index(questions),
           'scores': scoring.serialize_result(scores),
           }
    return JsonResponse(ctx)


@csrf_exempt
@require_GET
@json_errors
def instructor_review(request, participant_id):
    """
    Where should the instructor go to review this participant's team? To a
    new review if none exists yet; else to edit the existing one.
    """
    actor = access.actor_from_request(request)
    authorize(actor, 'instructor_review')
    participant = queries.find_participant(participant_id)
    instructor = Person.objects.get(id=actor.user_id)

    mapping, created = queries.find_or_create_review_mapping(participant,
                                                             instructor)
    response = None
    if not(created):
        response = queries.latest_response(mapping)

    if response is None:
        ctx = {'target': 'new', 'reference_id': mapping.id}
    else:
        ctx = {'target': 'edit', 'reference_id': response.id}
    ctx['return_context'] = 'instructor'
    return JsonResponse(ctx)


def parse_grade(grade_text):
    """
    The override grade as a Decimal that fits ``Participant.grade``; None
    for an empty grade.
    """
    if grade_text == '':
        return None
    invalid = GradesError('"{0}" is not a valid grade.'.format(grade_text))
    try:
        grade = decimal.Decimal(grade_text)
    except decimal.InvalidOperation:
        raise invalid
    if not grade.is_finite():
        raise invalid

    field = Participant._meta.get_field('grade')
    limit = decimal.Decimal(10) ** (field.max_digits - field.decimal_places)
    if abs(grade) >= limit:
        raise invalid
    grade = grade.quantize(decimal.Decimal(1).scaleb(-field.decimal_places),
                           rounding=decimal.ROUND_HALF_UP)
    if abs(grade) >= limit:
        raise invalid
    return grade


@csrf_exempt
@require_http_methods(['POST', 'PATCH'])
@json_errors
def update(request, participant_id):
    """
    Sets the instructor's grade for the participant, if it differs from the
    computed ``total_score``. An empty grade goes back to the computed score.
    """
    actor = access.actor_from_request(request)
    authorize(actor, 'update')
    participant = queries.find_participant(participant_id)
    data = request_data(request)

    grade_text = data.get('grade', '')
    grade_text = '' if grade_text is None else str(grade_text).strip()
    try:
        total_text = '%.2f' % float(data.get('total_score', ''))
    except (TypeError, ValueError):
        total_text = None

    name = participant.person.name
    if total_text == grade_text:
        return JsonResponse({'message': 'The grade for {0} is unchanged.'\
                                                               .format(name),
                             'participant_id': participant.id})

    grade = parse_grade(grade_text)
    participant =queries.set_participant_override_grade(participant.id, grade)
    if participant.grade is None:
        message = 'The computed score will be used for {0}.'.format(name)
    else:
        message = 'A score of {0}% has been saved for {1}.'.format(grade_text,
                                                                   name)
    logger.info(message)
    return JsonResponse({'message': message,
                         'participant_id': participant.id,
                         'grade': scoring.to_number(participant.grade)})


@csrf_exempt
@require_http_methods(['POST', 'PATCH'])
@json_errors
def save_grade_and_comment_for_submission(request, participant_id):
    """
    The instructor's grade and comment for the submission of the
    participant's team.
    """
    actor = access.actor_from_request(request)
    authorize(actor, 'save_grade_and_comment_for_submission')
    participant = queries.find_participant(participant_id)
    team = queries.team_of(participant)
    if team is None:
        raise NotFound('Team for assignment participant', participant.id)

    data = request_data(request)
    # Fields left out of the request keep their stored values.
    grade = data.get('grade_for_submission', team.grade_for_submission)
    comment = data.get('comment_for_submission', team.comment_for_submission)
    team = queries.set_team_submission_grade_and_comment(team.id, grade,
                                                         comment)
    logger.info('Submission grade {0} saved for team {1}'.format(
                                          team.grade_for_submission, team.id))
    return JsonResponse({'message': ('Grade and comment for submission '
                                     'successfully saved.'),
                         'participant_id': participant.id,
                         'team': scoring.serialize_team(team)})
