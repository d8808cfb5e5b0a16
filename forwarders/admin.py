from django.contrib import admin

from .models import Forwarder


@admin.register(Forwarder)
class ForwarderAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)
