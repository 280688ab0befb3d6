"""
Builds the object graph the routes work against

The store, repositories, managers and the team scheduler are created once per
application and kept in ``app.extensions['teamstock']``.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from teamstock import db
from teamstock.buisness.inventory.bom_manager import BomManager
from teamstock.buisness.inventory.pending_inventory_manager import PendingInventoryManager
from teamstock.buisness.notifications.stock_alert_manager import StockAlertManager
from teamstock.buisness.purchasing.purchase_request_manager import PurchaseRequestManager
from teamstock.buisness.teams.task_scheduler import TeamScheduler
from teamstock.config import SystemConfig, load_system_config
from teamstock.data.repositories import Repositories, build_repositories
from teamstock.data.store import BlobStore, MemoryBlobStore, SqlBlobStore
from teamstock.logger import get_logger
from teamstock.services.dashboard_service import DashboardService
from teamstock.services.report_service import ReportService

logger = get_logger("teamstock.build")


@dataclass
class TeamstockContext:
    config: SystemConfig
    store: BlobStore
    repositories: Repositories
    pending_inventory: PendingInventoryManager
    purchase_requests: PurchaseRequestManager
    bom: BomManager
    stock_alerts: StockAlertManager
    scheduler: TeamScheduler
    reports: ReportService
    dashboard: DashboardService

    def reconfigure(self, config: SystemConfig) -> None:
        """Swap in a new SystemConfig for every component that holds one"""
        self.config = config
        for component in (self.pending_inventory, self.purchase_requests, self.bom,
                          self.stock_alerts, self.scheduler, self.reports, self.dashboard):
            component.config = config
        logger.info("System configuration replaced")


def build_store(app) -> BlobStore:
    if app.config['STORE_BACKEND'] == 'sql':
        logger.info("Using relational collection store")
        return SqlBlobStore(db)
    path = app.config.get('MOCK_STORE_PATH')
    logger.info(f"Using mock collection store{f' backed by {path}' if path else ''}")
    return MemoryBlobStore(path)


def build_context(app, store: BlobStore | None = None) -> TeamstockContext:
    config = load_system_config(app.config.get('SYSTEM_CONFIG_PATH'))
    store = store or build_store(app)
    repositories = build_repositories(store)
    return TeamstockContext(
        config=config,
        store=store,
        repositories=repositories,
        pending_inventory=PendingInventoryManager(repositories, config),
        purchase_requests=PurchaseRequestManager(repositories, config),
        bom=BomManager(repositories, config),
        stock_alerts=StockAlertManager(repositories, config),
        scheduler=TeamScheduler(config),
        reports=ReportService(repositories, config),
        dashboard=DashboardService(repositories, config),
    )


def current_context() -> TeamstockContext:
    return current_app.extensions['teamstock']
