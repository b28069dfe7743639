from django.contrib import admin

from .models import Questionnaire, Question, AssignmentQuestionnaire
from .models import ResponseMap, Response


class QuestionnaireAdmin(admin.ModelAdmin):
    list_display = ("name", "questionnaire_type", "min_question_score",
                    "max_question_score", "created", "modified")
    list_filter = ['questionnaire_type']
admin.site.register(Questionnaire, QuestionnaireAdmin)



class QuestionAdmin(admin.ModelAdmin):
    list_display = ("questionnaire", "seq", "weight", "txt",)
    ordering = ['-questionnaire', 'seq']
    list_filter = ['questionnaire']
    list_max_show_all = 500
    list_per_page = 500
admin.site.register(Question, QuestionAdmin)



class AssignmentQuestionnaireAdmin(admin.ModelAdmin):
    list_display = ("assignment", "questionnaire", "used_in_round", "topic",
                    "questionnaire_weight")
    list_filter = ['assignment']
admin.site.register(AssignmentQuestionnaire, AssignmentQuestionnaireAdmin)



class ResponseMapAdmin(admin.ModelAdmin):
    list_display = ("reviewed_object", "reviewer", "reviewee", "map_type")
admin.site.register(ResponseMap, ResponseMapAdmin)



class ResponseAdmin(admin.ModelAdmin):
    list_display = ("map", "round", "is_submitted", "created", "modified")
    list_max_show_all = 500
    list_per_page = 500
admin.site.register(Response, ResponseAdmin)
