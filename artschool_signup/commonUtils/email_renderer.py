"""
Email template renderer using Jinja2 for easy maintenance
"""
from pathlib import Path
from typing import Tuple
from jinja2 import Environment, FileSystemLoader, select_autoescape
from datetime import datetime
from artschool_signup.config.settings import settings
from artschool_signup.schemas.signupSchema import SignupRecord


class EmailRenderer:
    """Renders email templates using Jinja2"""

    def __init__(self, template_dir: str = "templates/emails"):
        """
        Initialize email renderer

        Args:
            template_dir: Directory containing email template files, relative to the package
        """
        # Anchor the path to the package root so rendering does not depend on the CWD
        package_root = Path(__file__).resolve().parent.parent
        self.template_dir = package_root / template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
        )

        # Brand configuration - change once, applies everywhere
        self.brand_config = {
            'school_name': settings.SCHOOL_NAME,
            'frontend_url': settings.FRONTEND_URL,
            'support_email': settings.SUPPORT_EMAIL,
            'year': datetime.utcnow().year
        }

    def render(self, template_name: str, **context) -> str:
        """
        Render an email template with context

        Args:
            template_name: Name of template file (e.g., 'welcome_signup.txt')
            **context: Variables to pass to template

        Returns:
            Rendered string
        """
        template = self.env.get_template(template_name)

        # Merge brand config with user context
        full_context = {**self.brand_config, **context}

        return template.render(**full_context)

    def welcome_signup_email(self, record: SignupRecord) -> Tuple[str, str]:
        """Render subject and plain-text body of the welcome email"""
        subject = f"Welcome to {self.brand_config['school_name']} 🎨"
        text = self.render(
            'welcome_signup.txt',
            first_name=record.first_name,
            interests=list(record.interests),
            availability=record.availability,
            experience_level=record.experience_level,
        )
        return subject, text


# Singleton instance
_renderer = None


def get_email_renderer(template_dir: str = "templates/emails") -> EmailRenderer:
    """Get or create email renderer instance"""
    global _renderer
    if _renderer is None:
        _renderer = EmailRenderer(template_dir)
    return _renderer


def get_welcome_signup_email(record: SignupRecord) -> Tuple[str, str]:
    renderer = get_email_renderer()
    return renderer.welcome_signup_email(record)
