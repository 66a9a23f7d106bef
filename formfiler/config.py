"""Application configuration"""
from pydantic import BaseModel
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import FrozenSet, List


class FilingConfig(BaseModel):
    """
    Read-only configuration snapshot for one submission run.

    Built from Settings at the start of every invocation and passed by
    parameter to each component.
    """

    destination_container_id: str
    recipient_list: str
    admin_address: str
    subject_template: str
    standard_file_template: str
    special_file_prefix_template: str
    special_question_title: str
    folder_name_exclusions: FrozenSet[str] = frozenset()
    email_body_exclusions: FrozenSet[str] = frozenset()
    timezone: str = "America/New_York"

    model_config = {"frozen": True}

    @property
    def recipients(self) -> List[str]:
        """Comma-separated recipient list as individual addresses"""
        return [r.strip() for r in self.recipient_list.split(",") if r.strip()]


class Settings(BaseSettings):
    """Application settings"""

    # Supabase
    supabase_url: str
    supabase_service_role_key: str
    storage_bucket: str = "form-submissions"

    # Mail (Resend)
    resend_api_key: str
    mail_from: str = "Form Filer <forms@example.com>"

    # Application
    environment: str = "development"
    webhook_secret: str = ""  # Empty disables the X-Webhook-Secret check
    timezone: str = "America/New_York"
    reclassify_interval_minutes: int = 60  # 0 disables the scheduled reclassifier

    # Filing
    # Root folder (path prefix in the bucket) that receives one folder per submission
    destination_container_id: str = "submissions"
    email_recipients: str = "email1@email.com,email2@email.com"
    admin_email: str = "admin@email.com"

    # Placeholders are {Question Title}; the text must match the form question exactly
    email_subject_template: str = "Purchase Order Submission: {Funding Source} - {Vendor} - {Last Name}"
    # {QuestionTitle} is the title of the file upload question itself
    file_name_template: str = "{Funding Source} - {Vendor} - {Last Name} - {QuestionTitle}"
    file_name_prefix_template: str = "{Funding Source} - {Vendor} - {Last Name}"
    special_naming_question_title: str = "Supporting Docs (SDS, Justification, etc)"

    exclude_from_folder_name: List[str] = [
        "First Name",
        "Do you know the funding code or name of the fund?",
        "Is this purchase supporting a Capstone Project, Honors Research Project, or Student Independent Research Project?",
        "If you answered anything but no, please give the sponsoring dept, project, and Student name",
        "Description of the items being ordered and a justification for the order (e.g. resistors and sensors for use in EW309 coursework)",
        "Does this order require an ITPRA/ITPR or RFR (Radio Frequency Review)?",
        "Does this order contain any hazardous materials (HAZMAT)? Examples include glue, paint, solvents, etc.  (If so, provide SDS sheet)",
        "Total purchase price",
    ]
    exclude_from_email_body: List[str] = [
        "One or Two keywords word describing the items being ordered (this is used for folder naming and text in email subject lines)",
        "Do you know the funding code or name of the fund?",
        "Is this purchase supporting a Capstone Project, Honors Research Project, or Student Independent Research Project?",
        "If you answered anything but no, please give the sponsoring dept, project, and Student name",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = False

    def filing_config(self) -> FilingConfig:
        """Take an immutable snapshot of the filing settings"""
        return FilingConfig(
            destination_container_id=self.destination_container_id,
            recipient_list=self.email_recipients,
            admin_address=self.admin_email,
            subject_template=self.email_subject_template,
            standard_file_template=self.file_name_template,
            special_file_prefix_template=self.file_name_prefix_template,
            special_question_title=self.special_naming_question_title,
            folder_name_exclusions=frozenset(self.exclude_from_folder_name),
            email_body_exclusions=frozenset(self.exclude_from_email_body),
            timezone=self.timezone,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
