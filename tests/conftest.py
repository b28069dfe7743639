"""
Shared fixtures for the grades tests: one assignment with a review rubric,
a student in a team, and staff members.
"""
import pytest

from basic.models import Person, Assignment, Participant, Team, TeamMembership
from basic.models import SignUpTopic, SignedUpTeam
from rubric.models import Questionnaire, Question, AssignmentQuestionnaire
from grades.models import ParticipantScore


@pytest.fixture
def instructor(db):
    return Person.objects.create(name='instructor6', display_name='Ines Tructor',
                                 role=Person.INSTRUCTOR)


@pytest.fixture
def ta(db):
    return Person.objects.create(name='ta1', display_name='Tom Assist',
                                 role=Person.TA)


@pytest.fixture
def student(db):
    return Person.objects.create(name='student1', display_name='Sam Student',
                                 role=Person.STUDENT)


@pytest.fixture
def other_student(db):
    return Person.objects.create(name='student2', display_name='Olga Other',
                                 role=Person.STUDENT)


@pytest.fixture
def assignment(db):
    return Assignment.objects.create(name='Design document')


@pytest.fixture
def questionnaire(db, assignment):
    questionnaire = Questionnaire.objects.create(name='Review rubric',
                                        questionnaire_type=Questionnaire.REVIEW,
                                        max_question_score=100)
    AssignmentQuestionnaire.objects.create(assignment=assignment,
                                           questionnaire=questionnaire)
    return questionnaire


@pytest.fixture
def question(db, questionnaire):
    return Question.objects.create(questionnaire=questionnaire, seq=1,
                                   txt='Is the design clear?', weight=1)


@pytest.fixture
def participant(db, assignment, student):
    participant = Participant(person=student, assignment=assignment)
    participant.set_handle()
    participant.save()
    return participant


@pytest.fixture
def team(db, assignment, participant):
    team = Team.objects.create(assignment=assignment, name='Team A')
    TeamMembership.objects.create(team=team, person=participant.person)
    return team


@pytest.fixture
def make_participant(db, assignment):
    """ Adds another participant (and optionally puts them in a team)."""
    def _make(name, team=None, grade=None):
        person = Person.objects.create(name=name, role=Person.STUDENT)
        participant = Participant.objects.create(person=person,
                                                 assignment=assignment,
                                                 grade=grade)
        if team is not None:
            TeamMembership.objects.create(team=team, person=person)
        return participant
    return _make


@pytest.fixture
def add_score(db):
    def _add(participant, question, score, total_score=100, round=1):
        return ParticipantScore.objects.create(participant=participant,
                                               assignment=participant.assignment,
                                               question=question,
                                               score=score,
                                               total_score=total_score,
                                               round=round)
    return _add


@pytest.fixture
def topic(db, assignment, team):
    topic = SignUpTopic.objects.create(assignment=assignment,
                                       topic_name='Caching', micropayment=50)
    SignedUpTeam.objects.create(topic=topic, team=team)
    return topic


@pytest.fixture
def login(client):
    """ Puts the person in the session, as the sign-in would."""
    def _login(person):
        session = client.session
        session['user_id'] = person.id
        session.save()
        return client
    return _login
