from django.db import models


class Person(models.Model):
    """
    A user of the system: a student, a teaching assistant or staff member.
    """
    STUDENT = 'Student'
    TA = 'Teaching Assistant'
    INSTRUCTOR = 'Instructor'
    ADMIN = 'Administrator'
    SUPER_ADMIN = 'Super-Administrator'

    # Ordered from the least to the most privileged role.
    ROLES = ((STUDENT, 'Student'),
             (TA, 'Teaching Assistant'),
             (INSTRUCTOR, 'Instructor'),
             (ADMIN, 'Administrator'),
             (SUPER_ADMIN, 'Super-Administrator'),
            )

    name = models.CharField(max_length=100, unique=True,
                            help_text='Login name')
    email = models.EmailField(blank=True, default='')
    display_name = models.CharField(max_length=400, verbose_name='Display name',
                                    blank=True)
    role = models.CharField(max_length=20, choices=ROLES, default=STUDENT)
    initials = models.CharField(max_length=5, default='', blank=True,
                                help_text='Initials of the user (for display)')
    created = models.DateTimeField(auto_now_add=True)
    modified = models.DateTimeField(auto_now=True)

    @classmethod
    def privilege_of(cls, role):
        """
        Position of ``role`` in the privilege ordering; -1 if it is unknown.
        """
        names = [name for name, _ in cls.ROLES]
        if role in names:
            return names.index(role)
        return -1

    def save(self, *args, **kwargs):
        """
        Modifications when a ``Person`` instance is saved.
        """
        self.email = self.email.lower()

        if self.initials == '' and self.display_name:
            initials = ''
            for word in self.display_name.split(' '):
                if word and word[0].lower() != word[0]:
                    initials += word[0]
            self.initials = initials[0:5]

        super(Person, self).save(*args, **kwargs)

    def __str__(self):
        return u'[{0}]({1})'.format(self.initials or self.name, self.role)


class Assignment(models.Model):
    """
    A unit of coursework that is peer reviewed.
    """
    name = models.CharField(max_length=300)
    vary_by_round = models.BooleanField(default=False,
        help_text='Is a different rubric used in each round of review?')
    vary_by_topic = models.BooleanField(default=False,
        help_text='Is a topic-specific rubric used for reviews?')
    is_microtask = models.BooleanField(default=False,
        help_text=('Microtasks scale the score by the micropayment of the '
                   'signed-up topic.'))
    is_selfreview_enabled = models.BooleanField(default=False)
    max_team_size = models.PositiveSmallIntegerField(default=1)
    rounds_of_reviews = models.PositiveSmallIntegerField(default=1)

    def __str__(self):
        return u'{0}. {1}'.format(self.id, self.name)


class Participant(models.Model):
    """
    A person's enrollment in a specific ``Assignment``.
    """
    AUTHORIZATIONS = (('participant', 'Participant'),
                      ('reader', 'Reader'),
                      ('reviewer', 'Reviewer'),
                      ('submitter', 'Submitter'),
                     )

    person = models.ForeignKey(Person, on_delete=models.CASCADE)
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE,
                                   related_name='participants')
    grade = models.DecimalField(max_digits=6, decimal_places=2, blank=True,
                                null=True,
        help_text='Set by the instructor; overrides the computed score.')
    handle = models.CharField(max_length=100, blank=True, default='')
    authorization = models.CharField(max_length=12, choices=AUTHORIZATIONS,
                                     default='participant')

    class Meta:
        unique_together = ('person', 'assignment')

    def set_handle(self):
        """ The handle is what other reviewers see instead of the name."""
        self.handle = self.person.display_name or self.person.name

    @property
    def team(self):
        """ The team in this assignment the person is a member of, or None."""
        return Team.objects.filter(assignment_id=self.assignment_id,
                                   teammembership__person=self.person_id)\
                                                        .order_by('id').first()

    def __str__(self):
        return u'{0} in {1}'.format(self.person, self.assignment_id)


class Team(models.Model):
    """ A group of participants that submit together."""
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE)
    name = models.CharField(max_length=300, verbose_name='Team name')
    grade_for_submission = models.IntegerField(blank=True, null=True,
        default=None, help_text='Entered by the instructor.')
    comment_for_submission = models.TextField(blank=True, null=True,
                                              default=None)

    def has_user(self, person_id):
        return self.teammembership_set.filter(person_id=person_id).exists()

    def __str__(self):
        return u'{0}'.format(self.name)


class TeamMembership(models.Model):
    """
    Which team is a person a member of."""
    team = models.ForeignKey(Team, on_delete=models.CASCADE)
    person = models.ForeignKey(Person, on_delete=models.CASCADE)
    created = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return u'{0}: "{1}" is a member'.format(self.team, self.person)


class SignUpTopic(models.Model):
    """ A topic that teams sign up for within an assignment."""
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE)
    topic_name = models.CharField(max_length=300)
    micropayment = models.PositiveIntegerField(default=0,
        help_text='Points available for a microtask topic.')

    def __str__(self):
        return u'{0} [{1}]'.format(self.topic_name, self.micropayment)


class SignedUpTeam(models.Model):
    topic = models.ForeignKey(SignUpTopic, on_delete=models.CASCADE)
    team = models.ForeignKey(Team, on_delete=models.CASCADE)
    is_waitlisted = models.BooleanField(default=False)

    @classmethod
    def topic_id_by_team_id(cls, team_id):
        """
        The topic the team is signed up for, ignoring wait-listed sign ups.
        Returns ``None`` if there is none.
        """
        signed_up = cls.objects.filter(team_id=team_id, is_waitlisted=False)\
                                                              .order_by('id')
        if signed_up.count():
            return signed_up[0].topic_id
        else:
            return None

    def __str__(self):
        return u'{0} -> {1}'.format(self.team, self.topic)
