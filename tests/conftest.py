import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


SAMPLE_RESUME = """\
Jane Doe
Senior Software Engineer
jane.doe@example.com
(555) 123-4567
Austin, TX
linkedin.com/in/janedoe
github.com/janedoe
https://janedoe.dev

PROFESSIONAL SUMMARY
Backend engineer focused on distributed systems.
Ten years building payment platforms.

WORK EXPERIENCE
Lead Engineer - Acme Corp - Austin - Jan 2020 - Present
• Built scalable systems
• Mentored six engineers
Software Engineer - Globex | Remote | 2016 - 2019
- Shipped the billing API

EDUCATION
Bachelor of Science - State University - Austin - May 2015
Cumulative GPA: 3.8
Magna Cum Laude
Relevant Coursework: Algorithms, Databases

SKILLS
• Python
• Go
* Kubernetes

PROJECTS
Open Source Ledger
• Double-entry bookkeeping library
Technologies: Python, Postgres
Link: https://github.com/janedoe/ledger

CERTIFICATIONS
- Certified Kubernetes Administrator

LANGUAGES
• English
• Spanish
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME
