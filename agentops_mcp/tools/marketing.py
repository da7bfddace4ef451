"""Marketing tools: coupons, activities, points and channel statistics.

These tools serve generated demo data; nothing is persisted.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import date, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from agentops_mcp.tools.base import DATE_FORMAT, format_amount, tool

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

CustomerId = Annotated[str, Field(description="Customer ID")]
CustomerName = Annotated[str, Field(description="Customer name")]

COUPON_TYPES = ("Cash-off coupon", "Discount coupon", "Free shipping coupon", "Double points coupon")
ACTIVITY_NAMES = (
    "Spring Sale",
    "Summer Cool Festival",
    "Autumn Harvest",
    "Year-end Sale",
    "Member Day",
    "New Product Launch",
    "Brand Day",
    "Holiday Special",
    "Flash Sale",
    "Spend and Save",
)
ACTIVITY_TYPES = ("Spend and save", "Discount", "Gift with purchase", "Double points", "Lucky draw")
PARTICIPATION_NAMES = ("Spring Festival Sale", "Member Day", "New Product Trial", "Summer Clearance", "Brand Day")
PARTICIPATION_STATUSES = ("Completed", "In progress", "Registered", "Abandoned")
CHANNELS = (
    ("SMS", "SMS marketing"),
    ("EMAIL", "Email marketing"),
    ("PUSH", "Push notification"),
    ("APP", "In-app message"),
    ("WECHAT", "WeChat message"),
    ("WEBSITE", "Website banner"),
)


class ActivityStatus(StrEnum):
    ACTIVE = "ACTIVE"
    ENDED = "ENDED"
    UPCOMING = "UPCOMING"


class MarketingProvider:
    """Mock marketing data generators."""

    def __init__(
        self, rng: random.Random | None = None, clock: Callable[[], date] = date.today
    ) -> None:
        self.rng = rng or random.Random()
        self.clock = clock

    def _stamp(self, offset: int = 0) -> int:
        return time.time_ns() // 1_000_000 + offset

    def _in_days(self, days: int) -> str:
        return (self.clock() + timedelta(days=days)).strftime(DATE_FORMAT)

    def _amount(self, low: float, spread: float) -> str:
        return format_amount(self.rng.random() * spread + low)

    def _percent(self, low: float, spread: float) -> str:
        return f"{self._amount(low, spread)}%"

    @tool(description="Recommend coupons suited to a customer")
    def recommend_coupons(
        self,
        customer_id: CustomerId,
        customer_name: CustomerName,
        customer_type: Annotated[str, Field(description="Customer type (VIP, regular, corporate, ...)")],
    ) -> dict:
        if (customer_type or "").upper() == "VIP":
            coupons = [
                {
                    "coupon_id": f"V{self._stamp()}",
                    "coupon_name": "VIP exclusive big coupon",
                    "discount_amount": "100.00",
                    "condition": "Orders over 500",
                    "valid_until": self._in_days(30),
                    "category": "Storewide",
                },
                {
                    "coupon_id": f"V{self._stamp(1)}",
                    "coupon_name": "VIP exclusive offer",
                    "discount_amount": "50.00",
                    "condition": "Orders over 200",
                    "valid_until": self._in_days(15),
                    "category": "Selected products",
                },
            ]
        else:
            coupons = [
                {
                    "coupon_id": f"C{self._stamp()}",
                    "coupon_name": "New customer coupon",
                    "discount_amount": "20.00",
                    "condition": "Orders over 100",
                    "valid_until": self._in_days(7),
                    "category": "Storewide",
                },
                {
                    "coupon_id": f"C{self._stamp(1)}",
                    "coupon_name": "Everyday coupon",
                    "discount_amount": "10.00",
                    "condition": "Orders over 50",
                    "valid_until": self._in_days(5),
                    "category": "Selected categories",
                },
            ]

        logger.info(f"Recommended {len(coupons)} coupons for customer {customer_name}")
        return {
            "success": True,
            "customer_id": customer_id,
            "customer_name": customer_name,
            "recommended_coupons": coupons,
            "recommendation_count": len(coupons),
        }

    @tool(description="Query the coupons a customer holds")
    def query_customer_coupons(self, customer_id: CustomerId, customer_name: CustomerName) -> dict:
        coupons = [
            {
                "coupon_id": f"COUP{self._stamp(i)}",
                "coupon_name": f"Coupon {i + 1}",
                "type": COUPON_TYPES[i % len(COUPON_TYPES)],
                "discount_amount": self._amount(0, 100),
                "condition": f"Orders over {round(self.rng.random() * 200 + 50)}",
                "valid_until": self._in_days(self.rng.randint(1, 30)),
                "status": "Unused",
            }
            for i in range(5)
        ]
        logger.info(f"Customer {customer_name} holds {len(coupons)} coupons")
        return {
            "success": True,
            "customer_id": customer_id,
            "customer_name": customer_name,
            "coupons": coupons,
            "total_coupons": len(coupons),
        }

    @tool(description="List marketing activities")
    def query_marketing_activities(
        self,
        status: Annotated[ActivityStatus | None, Field(description="Activity status (ACTIVE, ENDED, UPCOMING)")] = None,
    ) -> dict:
        today = self.clock()
        activities = [
            {
                "activity_id": f"ACT{self._stamp(i)}",
                "activity_name": ACTIVITY_NAMES[i % len(ACTIVITY_NAMES)],
                "type": ACTIVITY_TYPES[i % len(ACTIVITY_TYPES)],
                "start_date": (today - timedelta(days=self.rng.randrange(10))).strftime(DATE_FORMAT),
                "end_date": (today + timedelta(days=30 - self.rng.randrange(20))).strftime(DATE_FORMAT),
                "status": str(status or ActivityStatus.ACTIVE),
                "target_audience": "All customers",
                "budget": self._amount(5000, 10000),
            }
            for i in range(5)
        ]
        logger.info(f"Listed {len(activities)} marketing activities")
        return {
            "success": True,
            "activities": activities,
            "activity_count": len(activities),
            "status_filter": str(status) if status else "ALL",
        }

    @tool(description="Query a customer's loyalty points balance")
    def query_customer_points(self, customer_id: CustomerId, customer_name: CustomerName) -> dict:
        current_points = self.rng.randrange(5000) + 1000
        points_info = {
            "customer_id": customer_id,
            "customer_name": customer_name,
            "current_points": current_points,
            "used_points": self.rng.randrange(2000),
            "expiring_points": self.rng.randrange(500),
            "total_earned": self.rng.randrange(8000) + 2000,
            "level": f"VIP{self.rng.randrange(3) + 1}",
            "estimated_value": format_amount(current_points / 100),
        }
        logger.info(f"Customer {customer_name} has {current_points} points")
        return {"success": True, "points_info": points_info}

    @tool(description="Query the marketing activities a customer took part in")
    def query_customer_activities(self, customer_id: CustomerId, customer_name: CustomerName) -> dict:
        today = self.clock()
        activities = [
            {
                "activity_id": f"PART{self._stamp(i)}",
                "activity_name": PARTICIPATION_NAMES[i % len(PARTICIPATION_NAMES)],
                "join_date": (today - timedelta(days=self.rng.randrange(60))).strftime(DATE_FORMAT),
                "status": PARTICIPATION_STATUSES[i % len(PARTICIPATION_STATUSES)],
                "reward_amount": self._amount(0, 100),
                "reward_type": "Points" if i % 2 == 0 else "Coupon",
            }
            for i in range(4)
        ]
        logger.info(f"Customer {customer_name} took part in {len(activities)} activities")
        return {
            "success": True,
            "customer_id": customer_id,
            "customer_name": customer_name,
            "participated_activities": activities,
            "activity_count": len(activities),
        }

    @tool(description="Issue a coupon to a customer")
    def issue_coupon_to_customer(
        self,
        customer_id: CustomerId,
        coupon_template_id: Annotated[str, Field(description="Coupon template ID")],
        reason: Annotated[str, Field(description="Reason for issuing")],
    ) -> dict:
        issued_coupon = {
            "coupon_instance_id": f"INST{self._stamp()}",
            "coupon_template_id": coupon_template_id,
            "coupon_name": "System issued coupon",
            "discount_amount": self._amount(10, 200),
            "valid_until": self._in_days(30),
            "status": "Issued",
        }
        logger.info(f"Issued coupon {issued_coupon['coupon_instance_id']} to customer {customer_id}")
        return {
            "success": True,
            "customer_id": customer_id,
            "reason": reason,
            "issued_coupon": issued_coupon,
            "message": "Coupon issued",
        }

    @tool(description="Query the performance statistics of a marketing activity")
    def query_activity_statistics(
        self,
        activity_id: Annotated[str, Field(description="Activity ID")],
        activity_name: Annotated[str, Field(description="Activity name")],
    ) -> dict:
        statistics = {
            "activity_id": activity_id,
            "activity_name": activity_name,
            "participants": self.rng.randrange(10000) + 1000,
            "conversion_rate": self._percent(5, 30),
            "revenue_generated": self._amount(10000, 100000),
            "cost": self._amount(5000, 20000),
            "roi": self._amount(1, 5),
            "engagement_rate": self._percent(10, 50),
        }
        logger.info(f"Statistics of activity {activity_name} computed")
        return {"success": True, "statistics": statistics, "status": "Completed"}

    @tool(description="Query the effectiveness of marketing channels")
    def query_channel_effectiveness(
        self,
        channel_type: Annotated[str | None, Field(description="Channel type (SMS, EMAIL, PUSH, APP, ...)")] = None,
    ) -> dict:
        channel_stats = [
            {
                "channel_type": code,
                "channel_name": name,
                "sent_count": self.rng.randrange(50000) + 5000,
                "open_rate": self._percent(5, 80),
                "click_rate": self._percent(1, 20),
                "conversion_rate": self._percent(0.1, 10),
                "cost": self._amount(100, 5000),
                "revenue": self._amount(500, 15000),
            }
            for code, name in CHANNELS
        ]
        logger.info(f"Computed effectiveness of {len(channel_stats)} channels")
        return {
            "success": True,
            "channel_stats": channel_stats,
            "channel_count": len(channel_stats),
            "filter_channel": channel_type or "ALL",
        }
