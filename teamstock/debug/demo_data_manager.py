#!/usr/bin/env python3
"""
Demo Data Manager
Seeds the collections and the team board with sample records

Handles:
- Loading the demo data JSON file
- Skipping any collection that already holds records
- Fail-fast error handling
"""

from pathlib import Path
import json

from teamstock.build import TeamstockContext
from teamstock.data.records import BillOfMaterials, InventoryItem, PurchaseRequest, Vendor
from teamstock.logger import get_logger

logger = get_logger("teamstock.debug.demo_data_manager")

DEMO_DATA_FILE = Path(__file__).parent / 'demo_data.json'
DEMO_ACTOR = 'System'

RECORD_TYPES = {
    'inventory': InventoryItem,
    'vendors': Vendor,
    'purchase-requests': PurchaseRequest,
    'bom': BillOfMaterials,
}


def insert_demo_data(context: TeamstockContext, enabled=True, path=None):
    """
    Insert demo records into every empty collection

    Args:
        context: Application object graph (repositories and scheduler)
        enabled (bool): Whether to insert demo data (default: True)
        path: Alternative JSON file

    Returns:
        dict: Per-collection summary ('inserted' with a count, or 'skipped')

    Raises:
        Exception: If any insertion fails (fail-fast)
    """
    if not enabled:
        logger.info("Demo data insertion is disabled")
        return {}

    demo_data = _load_demo_data_file(path or DEMO_DATA_FILE)
    summary = {}

    for key, record_cls in RECORD_TYPES.items():
        rows = demo_data.get(key) or []
        repository = context.repositories.by_key(key)
        if repository.count():
            logger.info(f"Demo data for {key} already present, skipping")
            summary[key] = {'status': 'skipped', 'reason': 'data_present'}
            continue
        try:
            added = repository.add_many([record_cls.from_dict(row) for row in rows], DEMO_ACTOR)
        except Exception as e:
            logger.error(f"Failed to insert demo data for {key}: {e}")
            raise
        summary[key] = {'status': 'inserted', 'count': len(added)}
        logger.info(f"Inserted {len(added)} demo record(s) into {key}")

    summary['team'] = _insert_team_data(context, demo_data)
    return summary


def _insert_team_data(context, demo_data):
    scheduler = context.scheduler
    if scheduler.members() or scheduler.tasks():
        logger.info("Team board already populated, skipping")
        return {'status': 'skipped', 'reason': 'data_present'}

    for member in demo_data.get('team_members') or []:
        scheduler.add_member(member)
    for task in demo_data.get('tasks') or []:
        scheduler.add_task(task)
    return {
        'status': 'inserted',
        'count': len(scheduler.members()) + len(scheduler.tasks()),
    }


def _load_demo_data_file(path):
    """
    Load the demo data JSON file

    Returns:
        dict: Demo data keyed by collection
    """
    demo_file = Path(path)
    if not demo_file.exists():
        raise FileNotFoundError(f"Demo data file not found: {demo_file}")

    try:
        with open(demo_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {demo_file}: {e}")
        raise
    logger.debug(f"Loaded demo data file: {demo_file}")
    return data
