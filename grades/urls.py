from django.urls import path

from . import views

app_name = 'grades'

urlpatterns = [

    # Example: /api/v1/grades/view_team/action_allowed?id=12
    path('<str:action>/action_allowed',
                views.action_allowed,
                name='action_allowed'),

    # The ``id`` is the assignment for the grading report
    path('<int:assignment_id>/view',
                views.view,
                name='view'),

    # The rest work with the id of an assignment participant
    path('<int:participant_id>/view_my_scores',
                views.view_my_scores,
                name='view_my_scores'),

    path('<int:participant_id>/view_team',
                views.view_team,
                name='view_team'),

    path('<int:participant_id>/edit',
                views.edit,
                name='edit'),

    path('<int:participant_id>/instructor_review',
                views.instructor_review,
                name='instructor_review'),

    path('<int:participant_id>/update',
                views.update,
                name='update'),

    path('<int:participant_id>/save_grade_and_comment_for_submission',
                views.save_grade_and_comment_for_submission,
                name='save_grade_and_comment_for_submission'),
]
