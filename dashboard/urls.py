from django.urls import path

from . import views

app_name = "dashboard"
urlpatterns = [
    path("", views.weekly_chart_page, name="home"),
    path("chart/", views.chart_state, name="chart"),
    path("chart/navigate/", views.chart_navigate, name="chart_navigate"),
    path("chart/legend/", views.chart_legend, name="chart_legend"),
    path("chart/user/", views.chart_user, name="chart_user"),
]
