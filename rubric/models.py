from django.db import models


class Questionnaire(models.Model):
    """
    A rubric template: review, meta-review, author feedback, etc.

    A Questionnaire consists of one or more Questions (usually a row).
    """
    REVIEW = 'ReviewQuestionnaire'
    METAREVIEW = 'MetareviewQuestionnaire'
    FEEDBACK = 'AuthorFeedbackQuestionnaire'
    TEAMMATE = 'TeammateReviewQuestionnaire'

    TYPE = ((REVIEW, 'Review'),
            (METAREVIEW, 'Meta-review'),
            (FEEDBACK, 'Author feedback'),
            (TEAMMATE, 'Teammate review'),)

    # The scoring category each questionnaire type is reported under
    SYMBOLS = {REVIEW: 'review',
               METAREVIEW: 'metareview',
               FEEDBACK: 'feedback',
               TEAMMATE: 'teammate'}

    name = models.CharField(max_length=300)
    questionnaire_type = models.CharField(max_length=40, choices=TYPE,
                                          default=REVIEW)
    min_question_score = models.PositiveSmallIntegerField(default=0)
    max_question_score = models.PositiveSmallIntegerField(default=5)
    created = models.DateTimeField(auto_now_add=True)
    modified = models.DateTimeField(auto_now=True)

    @property
    def symbol(self):
        return self.SYMBOLS.get(self.questionnaire_type, 'review')

    def __str__(self):
        return u'{0}. [{1}] {2}'.format(self.id, self.symbol, self.name)


class Question(models.Model):
    """
    A row in the rubric. Each question is scored by the reviewers.
    """
    questionnaire = models.ForeignKey(Questionnaire, on_delete=models.CASCADE,
                                      related_name='questions')
    seq = models.DecimalField(max_digits=6, decimal_places=2, default=1,
                              help_text='Order of the question in the rubric')
    txt = models.TextField(help_text='The prompt/criterion for the row')
    weight = models.PositiveSmallIntegerField(default=1)

    def __str__(self):
        return u'[{0}] {1}. {2}'.format(self.questionnaire_id,
                                        self.seq,
                                        self.txt[0:50])


class AssignmentQuestionnaire(models.Model):
    """
    Links a questionnaire to an assignment; optionally only for one round of
    review, or only for one topic.
    """
    assignment = models.ForeignKey('basic.Assignment', on_delete=models.CASCADE)
    questionnaire = models.ForeignKey(Questionnaire, on_delete=models.CASCADE)
    used_in_round = models.PositiveSmallIntegerField(blank=True, null=True,
                                                     default=None)
    topic = models.ForeignKey('basic.SignUpTopic', on_delete=models.SET_NULL,
                              blank=True, null=True, default=None)
    questionnaire_weight = models.PositiveSmallIntegerField(default=100,
        help_text='Percentage of the total score from this questionnaire')

    def __str__(self):
        return u'{0} -> {1} (round {2})'.format(self.assignment_id,
                                                self.questionnaire_id,
                                                self.used_in_round)


class ResponseMap(models.Model):
    """
    Who reviews whom: the ``reviewer`` participant reviews the work of the
    ``reviewee`` team.
    """
    TYPE = (('review', 'Peer review'),
            ('self_review', 'Self review'),)

    reviewed_object = models.ForeignKey('basic.Assignment',
                                        on_delete=models.CASCADE)
    reviewer = models.ForeignKey('basic.Participant', on_delete=models.CASCADE)
    reviewee = models.ForeignKey('basic.Team', on_delete=models.CASCADE)
    map_type = models.CharField(max_length=12, choices=TYPE, default='review')

    def __str__(self):
        return u'{0}: {1} reviews {2}'.format(self.map_type, self.reviewer_id,
                                             self.reviewee_id)


class Response(models.Model):
    """
    The filled-in questionnaire for a ``ResponseMap``.
    """
    map = models.ForeignKey(ResponseMap, on_delete=models.CASCADE)
    round = models.PositiveSmallIntegerField(blank=True, null=True)
    is_submitted = models.BooleanField(default=False)
    created = models.DateTimeField(auto_now_add=True)
    modified = models.DateTimeField(auto_now=True)

    def __str__(self):
        return u'Response {0} [submitted={1}]'.format(self.id,
                                                      self.is_submitted)
