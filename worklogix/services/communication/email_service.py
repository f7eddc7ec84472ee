import asyncio
import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, List, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from worklogix.core.config import Settings, settings

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "templates", "email")


class EmailService:
    """Email service for attendance notifications"""

    def __init__(self, config: Settings = settings):
        self.smtp_server = config.MAIL_SERVER
        self.smtp_port = config.MAIL_PORT
        self.username = config.MAIL_USERNAME
        self.password = config.MAIL_PASSWORD
        self.from_email = config.MAIL_FROM
        self.from_name = config.MAIL_FROM_NAME
        self.use_tls = config.MAIL_TLS
        self.use_ssl = config.MAIL_SSL

        # Setup Jinja2 for email templates
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html"])
        )

    @property
    def enabled(self) -> bool:
        return bool(self.smtp_server)

    def _deliver(self, msg: MIMEMultipart) -> None:
        smtp_class = smtplib.SMTP_SSL if self.use_ssl else smtplib.SMTP
        with smtp_class(self.smtp_server, self.smtp_port or (465 if self.use_ssl else 587)) as server:
            if self.use_tls and not self.use_ssl:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: str = None
    ) -> bool:
        """Send email; failures are logged and reported as False"""
        if not self.enabled:
            logger.info(f"Mail server not configured, skipping email to {to_email}: {subject}")
            return False

        try:
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = f"{self.from_name} <{self.from_email}>"
            msg['To'] = to_email

            if text_content:
                msg.attach(MIMEText(text_content, 'plain'))
            msg.attach(MIMEText(html_content, 'html'))

            await asyncio.to_thread(self._deliver, msg)

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False

    async def send_daily_summary(
        self,
        to_email: str,
        display_name: str,
        log: Dict[str, Any],
        reward: Dict[str, Any]
    ) -> bool:
        """Send a member the summary of their day"""
        try:
            template = self.template_env.get_template('daily_summary.html')
            html_content = template.render(
                display_name=display_name,
                log=log,
                reward=reward,
                app_name="WorkLogix"
            )

            return await self.send_email(
                to_email=to_email,
                subject=f"WorkLogix - Daily Attendance Summary ({log['date']})",
                html_content=html_content
            )

        except Exception as e:
            logger.error(f"Failed to send daily summary email: {str(e)}")
            return False

    async def send_weekly_summary(
        self,
        to_email: str,
        company_name: str,
        start_date,
        end_date,
        attendance_rate: float,
        total_records: int,
        top_performers: List[Dict[str, Any]]
    ) -> bool:
        """Send a company admin the weekly attendance summary"""
        try:
            template = self.template_env.get_template('weekly_summary.html')
            html_content = template.render(
                company_name=company_name,
                start_date=start_date,
                end_date=end_date,
                attendance_rate=attendance_rate,
                total_records=total_records,
                top_performers=top_performers,
                app_name="WorkLogix"
            )

            return await self.send_email(
                to_email=to_email,
                subject=f"WorkLogix - Weekly Attendance Summary for {company_name}",
                html_content=html_content
            )

        except Exception as e:
            logger.error(f"Failed to send weekly summary email: {str(e)}")
            return False

    async def send_monthly_achievement(
        self,
        to_email: str,
        display_name: str,
        report: Dict[str, Any],
        badges: List[str],
        bonus_points: int = 0,
        month_label: Optional[str] = None
    ) -> bool:
        """Send a member their month in review and any badges earned"""
        try:
            template = self.template_env.get_template('monthly_achievement.html')
            html_content = template.render(
                display_name=display_name,
                report=report,
                badges=badges,
                bonus_points=bonus_points,
                month_label=month_label or f"{report['month']:02d}/{report['year']}",
                app_name="WorkLogix"
            )

            return await self.send_email(
                to_email=to_email,
                subject="WorkLogix - Your Monthly Attendance Achievements",
                html_content=html_content
            )

        except Exception as e:
            logger.error(f"Failed to send monthly achievement email: {str(e)}")
            return False
