from .dashboard_service import CampaignView, DashboardOutput, DashboardService

__all__ = ["CampaignView", "DashboardOutput", "DashboardService"]
