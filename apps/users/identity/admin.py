"""Users Identity - Admin Configuration."""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from unfold.admin import ModelAdmin
from unfold.forms import AdminPasswordChangeForm, UserChangeForm, UserCreationForm

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin, ModelAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    change_password_form = AdminPasswordChangeForm
    list_display = ['email', 'full_name', 'role_badge', 'phone', 'is_active', 'date_joined']
    list_filter = ['role', 'is_staff', 'is_active']
    search_fields = ['email', 'username', 'first_name', 'last_name', 'phone']
    ordering = ['-date_joined']
    filter_horizontal = ['occupations', 'addresses', 'groups', 'user_permissions']

    fieldsets = (
        (None, {'fields': ('email', 'password', 'role')}),
        ('Personal Info', {'fields': ('first_name', 'last_name', 'phone', 'avatar', 'about')}),
        ('Marketplace', {'fields': ('occupations', 'addresses')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important Dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = ((None, {'classes': ('wide',), 'fields': ('email', 'role', 'password1', 'password2')}),)
    readonly_fields = ['date_joined', 'last_login']
    actions = ['deactivate_users']

    @admin.display(description='Full Name')
    def full_name(self, obj):
        return obj.full_name or '-'

    @admin.display(description='Role')
    def role_badge(self, obj):
        colors = {'client': '#2563eb', 'master': '#16a34a', 'admin': '#dc2626'}
        return format_html('<span style="color: {};">{}</span>', colors.get(obj.role, '#6c757d'), obj.get_role_display())

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        queryset.update(is_active=False)
