from django.contrib import admin
from .models import ParticipantScore



class ParticipantScoreAdmin(admin.ModelAdmin):
    list_display = ("participant", "assignment", "question", "score",
                    "total_score", "round")
    ordering = ['participant', 'round', 'question']
    list_filter = ['assignment', 'round']
    list_max_show_all = 1000
    list_per_page = 1000
admin.site.register(ParticipantScore, ParticipantScoreAdmin)
