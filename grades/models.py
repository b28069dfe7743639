from django.db import models


class ParticipantScore(models.Model):
    """
    The score a participant received on one question, in one round of review.
    Written by the review-response processing; only read here.
    """
    participant = models.ForeignKey('basic.Participant',
                                    on_delete=models.CASCADE)
    assignment = models.ForeignKey('basic.Assignment', on_delete=models.CASCADE)
    question = models.ForeignKey('rubric.Question', on_delete=models.CASCADE)
    score = models.IntegerField(default=0)
    total_score = models.IntegerField(default=0,
        help_text='The largest value achievable for this question')
    round = models.PositiveSmallIntegerField(default=1)
    modified = models.DateTimeField(auto_now=True)

    def __str__(self):
        return '[{0}/{1}] for {2} (round {3})'.format(self.score,
                                                      self.total_score,
                                                      self.participant_id,
                                                      self.round)
