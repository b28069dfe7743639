"""
Score aggregation for the grades views.

How is a participant's score represented? Data structure returned by
``participant_scores``:

    {'participant': <Participant>,
     'review':      {'assessments': [entry, entry, ...],
                     'scores': {'max': .., 'min': .., 'avg': ..},
                     'weighted': ..,
                     'by_round': {1: {...}, 2: {...}}},   <-- round varying only
     'metareview':  {...},
     'total_score': Decimal,
     'team_average': Decimal or None,
     'max_pts_available': int}                            <-- microtask only

Each ``entry`` is one score record: question_id, score, total_score, round,
question and its percentage.

All percentages are ``Decimal`` values, rounded to GRADES_PERCENT_PLACES.
"""
from django.conf import settings

# Python and 3rd party imports
import decimal
from collections import namedtuple, OrderedDict, defaultdict

import numpy as np

# Imports from this app
from . import queries

# Logging
import logging
logger = logging.getLogger(__name__)

# ``round`` is None unless the assignment varies its rubric by round.
QuestionnaireKey = namedtuple('QuestionnaireKey', ['questionnaire_id', 'round'])

ZERO = decimal.Decimal(0)
HUNDRED = decimal.Decimal(100)

# Only the review rubric varies by round.
ROUND_VARYING_SYMBOL = 'review'


def quantize(value):
    places = getattr(settings, 'GRADES_PERCENT_PLACES', 2)
    exponent = decimal.Decimal(1).scaleb(-places)
    return decimal.Decimal(value).quantize(exponent,
                                           rounding=decimal.ROUND_HALF_UP)


def percentage(score, total_score):
    """ ``score`` as a percentage of ``total_score``; 0 if the total is 0."""
    if not(total_score):
        return quantize(ZERO)
    return quantize(decimal.Decimal(score) * HUNDRED /
                    decimal.Decimal(total_score))


def mean(values):
    values = list(values)
    if not(values):
        return quantize(ZERO)
    return quantize(sum(values, ZERO) / len(values))


# Question index
# --------------
def retrieve_questions(questionnaires, assignment):
    """
    Maps each questionnaire (and round, when the rubric varies by round) to
    its ordered list of questions.

    A questionnaire linked for several rounds is indexed once per round. If
    there is no link with a round, the key falls back to the plain
    questionnaire.
    """
    questions = OrderedDict()
    for questionnaire in questionnaires:
        rounds = [None]
        if assignment.vary_by_round:
            links = queries.assignment_questionnaire_links(assignment.id,
                                                           questionnaire.id)
            rounds = [link.used_in_round for link in links] or [None]

        for used_in_round in rounds:
            key = QuestionnaireKey(questionnaire.id, used_in_round)
            if key in questions:
                continue
            questions[key] = list(questionnaire.questions.order_by('seq', 'id'))

    return questions


def list_questions(assignment):
    """
    All questions of all questionnaires of this assignment, ignoring rounds.
    """
    questions = OrderedDict()
    for questionnaire in queries.questionnaires_of(assignment):
        key = QuestionnaireKey(questionnaire.id, None)
        questions[key] = list(questionnaire.questions.order_by('seq', 'id'))
    return questions


def topic_question_index(assignment, team):
    """
    For assignments with a topic-specific rubric: the single questionnaire
    for the topic the ``team`` signed up for. Falls back to the questionnaires
    that are not topic specific when the topic (or its rubric) is missing.
    """
    topic_id = queries.signed_up_topic_id_for(assignment, team)
    questionnaire = None
    if topic_id is not None:
        questionnaire = queries.topic_questionnaire(assignment, topic_id)

    if questionnaire is None:
        logger.debug('No topic rubric for team {0}; using defaults'.format(
                                                                        team))
        return retrieve_questions(
                    queries.questionnaires_of(assignment, topic_specific=False),
                    assignment)

    key = QuestionnaireKey(questionnaire.id, None)
    return OrderedDict([(key,
                    list(questionnaire.questions.order_by('seq', 'id')))])


def questions_for(assignment, team=None):
    if assignment.vary_by_topic:
        return topic_question_index(assignment, team)
    return retrieve_questions(queries.questionnaires_of(assignment), assignment)


def flatten_questions(questions):
    return [(key, question) for key, items in questions.items()
                            for question in items]


def find_question(flat_questions, record):
    """
    The (key, question) a score record belongs to; (None, None) if the
    question is not part of the index.
    """
    for key, question in flat_questions:
        if question.id != record.question_id:
            continue
        if key.round is not None and key.round != record.round:
            continue
        return key, question
    return None, None


# Score aggregation
# -----------------
def score_entry(record, question):
    entry = OrderedDict()
    entry['question_id'] = question.id
    entry['score'] = record.score
    entry['total_score'] = record.total_score
    entry['round'] = record.round
    entry['question'] = question
    entry['percentage'] = percentage(record.score, record.total_score)
    return entry


def weighted_percentage(entries):
    """
    sum(score * weight) / sum(total_score * weight), as a percentage.
    """
    earned = sum((decimal.Decimal(e['score']) * e['question'].weight
                  for e in entries), ZERO)
    possible = sum((decimal.Decimal(e['total_score']) * e['question'].weight
                    for e in entries), ZERO)
    if not(possible):
        return quantize(ZERO)
    return quantize(earned * HUNDRED / possible)


def summarize(entries):
    percentages = [e['percentage'] for e in entries]
    if percentages:
        stats = {'max': max(percentages),
                 'min': min(percentages),
                 'avg': mean(percentages)}
    else:
        stats = {'max': None, 'min': None, 'avg': None}

    category = OrderedDict()
    category['assessments'] = entries
    category['scores'] = stats
    category['weighted'] = weighted_percentage(entries)
    return category


def compute_assignment_score(participant, questions):
    """
    Groups the participant's score records by (category, round). The round
    is only used for the review category, and only if the assignment varies
    the rubric by round.

    Returns the groups, and the entries in the order they were fetched.
    """
    assignment = participant.assignment
    flat = flatten_questions(questions)

    grouped = OrderedDict()
    for key, items in questions.items():
        if items:
            symbol = items[0].questionnaire.symbol
            used_in_round = key.round if symbol == ROUND_VARYING_SYMBOL else None
            grouped.setdefault((symbol, used_in_round), [])

    entries = []
    for record in queries.score_records_of(participant, assignment):
        key, question = find_question(flat, record)
        if question is None:
            logger.debug('Score {0} is not for a question in this index'\
                                                            .format(record.id))
            continue

        symbol = question.questionnaire.symbol
        used_in_round = None
        if assignment.vary_by_round and symbol == ROUND_VARYING_SYMBOL:
            used_in_round = record.round
        entry = score_entry(record, question)
        grouped.setdefault((symbol, used_in_round), []).append(entry)
        entries.append(entry)

    return grouped, entries


def merge_scores(grouped):
    """
    One category per questionnaire symbol. When the groups carry a round, the
    per-round summaries are kept in the category under ``by_round``.
    """
    per_symbol = OrderedDict()
    for (symbol, used_in_round), entries in grouped.items():
        per_symbol.setdefault(symbol, OrderedDict())[used_in_round] = entries

    categories = OrderedDict()
    for symbol, rounds in per_symbol.items():
        entries = [e for round_entries in rounds.values()
                     for e in round_entries]
        category = summarize(entries)
        numbered = sorted((r, e) for r, e in rounds.items() if r is not None)
        if numbered:
            category['by_round'] = OrderedDict((r, summarize(e))
                                               for r, e in numbered)
        categories[symbol] = category
    return categories


def category_weights(assignment, questions):
    """
    The questionnaire weight of each category; taken from the first link of
    the first questionnaire in that category. Unlinked questionnaires count
    fully (100).
    """
    weights = OrderedDict()
    for key, items in questions.items():
        if not(items):
            continue
        symbol = items[0].questionnaire.symbol
        if symbol in weights:
            continue
        link = queries.assignment_questionnaire_link(assignment.id,
                                                     key.questionnaire_id)
        if link:
            weights[symbol] = link.questionnaire_weight
        else:
            weights[symbol] = 100
    return weights


def compute_total_score(categories, weights):
    total = ZERO
    for symbol, category in categories.items():
        if not(category['assessments']):
            continue
        weight = decimal.Decimal(weights.get(symbol, 100))
        total += category['weighted'] * weight / HUNDRED
    return quantize(total)


def team_average(entries):
    """ Mean percentage over the entries; None if there are no entries."""
    if not(entries):
        return None
    return mean(e['percentage'] for e in entries)


def participant_scores(participant, questions):
    """
    The score breakdown and total score of one ``participant``.

    Total score resolution:
    1. the weighted total over the categories,
    2. scaled by the topic's micropayment for microtasks,
    3. replaced by the participant's override grade if there is one, else
       capped at GRADES_MAX_TOTAL_SCORE.

    Returns None for a microtask assignment without any topic (there is
    nothing to scale by, so the score does not apply).
    """
    assignment = participant.assignment
    team = queries.team_of(participant)

    scores = OrderedDict()
    scores['participant'] = participant

    grouped, entries = compute_assignment_score(participant, questions)
    categories = merge_scores(grouped)
    scores.update(categories)
    scores['total_score'] = compute_total_score(categories,
                                        category_weights(assignment, questions))

    if team is not None:
        scores['team_average'] = team_average(entries)
    else:
        scores['team_average'] = None

    if assignment.is_microtask:
        topic = queries.microtask_topic(assignment, team)
        if topic is None:
            logger.debug('Microtask {0} has no topic'.format(assignment.id))
            return None

        scores['total_score'] = quantize(scores['total_score'] *
                                decimal.Decimal(topic.micropayment) / HUNDRED)
        scores['max_pts_available'] = topic.micropayment

    if participant.grade is not None:
        scores['total_score'] = participant.grade
    else:
        cap = decimal.Decimal(getattr(settings, 'GRADES_MAX_TOTAL_SCORE', 100))
        if scores['total_score'] > cap:
            scores['total_score'] = cap

    return scores


# Heat map
# --------
def review_grades(assignment, questions=None):
    """
    Scores of every participant in the ``assignment``, and the average of
    every team.

    If ``questions`` is not given, the index is built here (per team, for
    topic-specific rubrics).

    Team averages are the mean of the team averages of the members that
    have scores. Set GRADES_LAST_MEMBER_TEAM_AVERAGE to keep the average of
    the last member processed instead.
    """
    last_member = getattr(settings, 'GRADES_LAST_MEMBER_TEAM_AVERAGE', False)
    if questions is None and not(assignment.vary_by_topic):
        questions = questions_for(assignment)

    scores = {'participants': OrderedDict(),
              'teams': OrderedDict(),
              'participant_count': 0}
    buckets = defaultdict(list)

    participants = list(queries.participants_of(assignment))
    for participant in participants:
        team = queries.team_of(participant)
        index = questions
        if index is None:
            index = questions_for(assignment, team)

        result = participant_scores(participant, index)
        if result is None:
            continue
        scores['participants'][participant.id] = result

        if team is None or result['team_average'] is None:
            continue
        if last_member:
            buckets[team.id] = [result['team_average']]
        else:
            buckets[team.id].append(result['team_average'])

    for team_id in sorted(buckets):
        scores['teams'][team_id] = mean(buckets[team_id])

    # Count before any ``None`` results were left out
    scores['participant_count'] = len(participants)
    return scores


def averages(scores):
    return list(scores['teams'].values())


def average_summary(values):
    """
    Range and median of the team averages (the axis of the averages chart).
    """
    if not(values):
        return {'min': 0.0, 'max': 0.0, 'median': 0.0}
    values = np.array([float(value) for value in values])
    return {'min': float(values.min()),
            'max': float(values.max()),
            'median': float(np.median(values))}


# Serialization
# -------------
def to_number(value):
    if isinstance(value, decimal.Decimal):
        return float(value)
    return value


def serialize_question(question):
    return {'id': question.id,
            'questionnaire_id': question.questionnaire_id,
            'seq': str(question.seq),
            'txt': question.txt,
            'weight': question.weight}


def serialize_participant(participant):
    return {'id': participant.id,
            'user_id': participant.person_id,
            'handle': participant.handle,
            'grade': to_number(participant.grade)}


def serialize_assignment(assignment):
    return {'id': assignment.id,
            'name': assignment.name,
            'vary_by_round': assignment.vary_by_round,
            'vary_by_topic': assignment.vary_by_topic,
            'is_microtask': assignment.is_microtask}


def serialize_team(team):
    if team is None:
        return None
    return {'id': team.id,
            'name': team.name,
            'grade_for_submission': team.grade_for_submission,
            'comment_for_submission': team.comment_for_submission}


def serialize_index(questions):
    return [{'questionnaire_id': key.questionnaire_id,
             'round': key.round,
             'questions': [serialize_question(q) for q in items]}
            for key, items in questions.items()]


def serialize_category(category):
    out = OrderedDict()
    out['assessments'] = []
    for entry in category['assessments']:
        item = OrderedDict()
        for name, value in entry.items():
            if name == 'question':
                item[name] = serialize_question(value)
            else:
                item[name] = to_number(value)
        out['assessments'].append(item)
    out['scores'] = dict((k, to_number(v))
                         for k, v in category['scores'].items())
    out['weighted'] = to_number(category['weighted'])
    if 'by_round' in category:
        out['by_round'] = OrderedDict((r, serialize_category(c))
                                      for r, c in category['by_round'].items())
    return out


def serialize_result(result, redact=False):
    """
    A JSON-ready copy of a ``participant_scores`` result. With ``redact``
    the participant is left out.
    """
    if result is None:
        return None
    out = OrderedDict()
    for name, value in result.items():
        if name == 'participant':
            if not(redact):
                out[name] = serialize_participant(value)
        elif isinstance(value, dict):
            out[name] = serialize_category(value)
        else:
            out[name] = to_number(value)
    return out


def redact_scores(participants):
    """
    Replace participant ids with "reviewer_1", "reviewer_2", ... in order of
    increasing participant id.
    """
    ordered = sorted(participants.items(), key=lambda item: item[0])
    return OrderedDict(('reviewer_{0}'.format(idx),
                        serialize_result(result, redact=True))
                       for idx, (_, result) in enumerate(ordered, start=1))


def assemble_heat_map(assignment_id, redact=False):
    """
    Everything the heat map for an assignment shows: all scores, the team
    averages and their mean. Use ``redact`` for a student audience.
    """
    assignment = queries.find_assignment(assignment_id)
    scores = review_grades(assignment)
    team_averages = averages(scores)
    logger.debug('Heat map for assignment {0}: {1} participants'.format(
                                    assignment.id, scores['participant_count']))

    if redact:
        participants = redact_scores(scores['participants'])
    else:
        participants = OrderedDict((str(pid), serialize_result(result))
                            for pid, result in scores['participants'].items())

    return {'scores': {'participants': participants,
                       'teams': OrderedDict((str(tid), to_number(avg))
                                    for tid, avg in scores['teams'].items())},
            'assignment': serialize_assignment(assignment),
            'averages': [to_number(avg) for avg in team_averages],
            'avg_of_avg': to_number(mean(team_averages)),
            'review_score_count': scores['participant_count'],
            'average_summary': average_summary(team_averages)}
