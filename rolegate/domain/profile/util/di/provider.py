"""DI provider for profile domain."""

from dishka import provide

from rolegate.domain.profile.command.create_profile import CreateProfileHandler
from rolegate.domain.profile.command.review_profile import ReviewProfileHandler
from rolegate.domain.profile.command.update_profile import UpdateProfileHandler
from rolegate.domain.profile.query.get_profile import (
    GetDashboardHandler,
    GetOwnProfileHandler,
    ListProfilesHandler,
)
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope


class ProfileProvider(Provider):
    # Services
    profile_service = provide(ProfileService, scope=Scope.UOW)

    # Command Handlers
    create_profile_handler = provide(CreateProfileHandler, scope=Scope.UOW)
    update_profile_handler = provide(UpdateProfileHandler, scope=Scope.UOW)
    review_profile_handler = provide(ReviewProfileHandler, scope=Scope.UOW)

    # Query Handlers
    get_own_profile_handler = provide(GetOwnProfileHandler, scope=Scope.UOW)
    list_profiles_handler = provide(ListProfilesHandler, scope=Scope.UOW)
    get_dashboard_handler = provide(GetDashboardHandler, scope=Scope.UOW)
