from django.contrib import admin
from .models import Person, Assignment, Participant
from .models import Team, TeamMembership, SignUpTopic, SignedUpTeam


class PersonAdmin(admin.ModelAdmin):
    list_display = ("name", "display_name", "initials", "role", "email",
                    "created", "modified")
    list_filter = ['role']
    list_per_page = 1000
admin.site.register(Person, PersonAdmin)



class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("name", "vary_by_round", "vary_by_topic", "is_microtask",
                    "is_selfreview_enabled", "max_team_size",
                    "rounds_of_reviews")
admin.site.register(Assignment, AssignmentAdmin)



class ParticipantAdmin(admin.ModelAdmin):
    list_display = ("person", "assignment", "handle", "authorization", "grade")
    list_filter = ['assignment']
    list_per_page = 1000
admin.site.register(Participant, ParticipantAdmin)



class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "assignment", "grade_for_submission",
                    "comment_for_submission")
    list_filter = ['assignment']
admin.site.register(Team, TeamAdmin)



class TeamMembershipAdmin(admin.ModelAdmin):
    list_display = ("person", "team", "created")
admin.site.register(TeamMembership, TeamMembershipAdmin)



class SignUpTopicAdmin(admin.ModelAdmin):
    list_display = ("topic_name", "assignment", "micropayment")
admin.site.register(SignUpTopic, SignUpTopicAdmin)



class SignedUpTeamAdmin(admin.ModelAdmin):
    list_display = ("team", "topic", "is_waitlisted")
admin.site.register(SignedUpTeam, SignedUpTeamAdmin)

# =======
from django.contrib.sessions.models import Session
class SessionAdmin(admin.ModelAdmin):
    def _session_data(self, obj):
        return obj.get_decoded()
    list_display = ['session_key', '_session_data', 'expire_date']
    list_per_page = 1000
admin.site.register(Session, SessionAdmin)
