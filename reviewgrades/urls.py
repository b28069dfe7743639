from django.urls import path, include
from django.contrib import admin

"""reviewgrades URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/stable/topics/http/urls/
Including another URLconf
    1. Import the include() function: from django.urls import path, include
    2. Add a URL to urlpatterns:  path('blog/', include('blog.urls'))
"""

urlpatterns = [
    path('admin/', admin.site.urls),

    # Grade reports, heat maps and grade overrides
    path('api/v1/grades/', include('grades.urls')),
]
