from vercel_api.resources.base import Resource
from vercel_api.resources.deployments import DeploymentsAPI
from vercel_api.resources.domains import DomainsAPI
from vercel_api.resources.projects import ProjectsAPI
from vercel_api.resources.teams import TeamsAPI

__all__ = ["Resource", "DeploymentsAPI", "DomainsAPI", "ProjectsAPI", "TeamsAPI"]
