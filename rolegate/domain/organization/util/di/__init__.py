from rolegate.domain.organization.util.di.provider import OrganizationProvider

__all__ = ["OrganizationProvider"]
