"""Sample HR policies for local runs and demos."""

from dataclasses import replace
from typing import List

from ..store.models import Policy

SAMPLE_POLICIES: List[Policy] = [
    Policy(
        id="sample_travel_india_001",
        title="Travel Policy - India Operations",
        content="""# Travel Policy for India Operations

## Domestic Travel
- Employees are entitled to economy class flights for domestic travel within India
- Hotel accommodation up to INR 5,000 per night in metro cities, INR 3,000 in other cities
- Daily allowance of INR 1,500 for meals and incidentals
- Local transportation via company-approved cab services or public transport

## International Travel
- Business class for flights over 8 hours, economy for shorter flights
- Hotel accommodation up to $200 per night
- Daily allowance of $75 for meals and incidentals
- Travel insurance is mandatory and covered by company

## Approval Process
- Domestic travel: Manager approval required
- International travel: Manager + HR approval required
- All travel must be booked through approved travel agency

## Expense Reimbursement
- Submit expenses within 30 days of travel completion
- Original receipts required for all expenses above INR 500
- Reimbursement processed within 15 business days""",
        category="travel",
        tags=["travel", "india", "domestic", "international", "expenses", "reimbursement"],
        version="2.1",
        source="sample_travel_india_001",
    ),
    Policy(
        id="sample_leave_policy_001",
        title="Annual Leave Policy",
        content="""# Annual Leave Policy

## Leave Entitlement
- New employees: 15 days annual leave in first year
- 1-3 years service: 20 days annual leave
- 3+ years service: 25 days annual leave
- Maximum carry forward: 5 days to next year

## Leave Types
- **Annual Leave**: Vacation and personal time off
- **Sick Leave**: 12 days per year, no carry forward
- **Maternity Leave**: 26 weeks paid leave
- **Paternity Leave**: 2 weeks paid leave
- **Bereavement Leave**: 3 days for immediate family

## Application Process
- Apply for leave at least 2 weeks in advance
- Manager approval required
- HR notification for leaves over 5 consecutive days
- Emergency leave can be applied retroactively with manager approval

## Public Holidays
- All national and regional public holidays are observed
- Floating holidays: 2 days per year for personal/religious observances

## Leave Without Pay
- Available after exhausting annual leave
- Manager and HR approval required
- Maximum 30 days per year""",
        category="leave",
        tags=["annual leave", "vacation", "sick leave", "maternity", "paternity", "holidays"],
        version="3.0",
        source="sample_leave_policy_001",
    ),
    Policy(
        id="sample_remote_policy_001",
        title="Remote Work Policy",
        content="""# Remote Work Policy

## Eligibility
- Employees with 6+ months tenure
- Role must be suitable for remote work
- Manager approval required
- Performance rating of "Meets Expectations" or above

## Work Arrangements
- **Fully Remote**: Work from home full-time
- **Hybrid**: 2-3 days in office, remainder remote
- **Flexible**: Ad-hoc remote work as needed

## Requirements
- Dedicated workspace with reliable internet (minimum 25 Mbps)
- Company-provided laptop and necessary equipment
- Availability during core business hours (10 AM - 4 PM local time)
- Regular check-ins with manager (weekly minimum)

## Equipment and Expenses
- Company provides laptop, monitor, keyboard, mouse
- Internet allowance: INR 2,000 per month for fully remote employees
- Ergonomic chair and desk setup allowance: INR 15,000 one-time

## Security Requirements
- VPN connection for accessing company systems
- Two-factor authentication mandatory
- Regular security training completion""",
        category="remote",
        tags=["remote work", "hybrid", "work from home", "equipment", "security"],
        version="1.5",
        source="sample_remote_policy_001",
    ),
    Policy(
        id="sample_health_benefits_001",
        title="Health Benefits Policy",
        content="""# Health Benefits Policy

## Medical Insurance
- Comprehensive health insurance for employee and family
- Coverage includes hospitalization, outpatient, dental, vision
- Annual limit: INR 10,00,000 per family
- Cashless treatment at 5000+ network hospitals

## Wellness Programs
- Annual health checkup (fully covered)
- Gym membership reimbursement up to INR 3,000 per month
- Mental health counseling sessions (12 sessions per year)

## Maternity Benefits
- Pre and post-natal care coverage
- Delivery expenses fully covered
- Newborn coverage from day one

## Claims Process
- Cashless: Use insurance card at network hospitals
- Reimbursement: Submit claims within 30 days
- Pre-authorization required for planned treatments over INR 50,000
- Claims processed within 15 business days""",
        category="benefits",
        tags=["health insurance", "medical", "wellness", "maternity", "emergency", "claims"],
        version="2.3",
        source="sample_health_benefits_001",
    ),
    Policy(
        id="sample_conduct_policy_001",
        title="Code of Conduct",
        content="""# Employee Code of Conduct

## Professional Behavior
- Treat all colleagues with respect and dignity
- Maintain professional demeanor in all interactions
- Dress code: Business casual in office, appropriate attire for video calls

## Diversity and Inclusion
- Zero tolerance for discrimination based on race, gender, religion, age, or sexual orientation
- Report any incidents of harassment or discrimination immediately

## Confidentiality
- Protect company confidential information and trade secrets
- Do not share client information outside authorized personnel

## Reporting Violations
- Report violations to manager, HR, or ethics hotline
- Anonymous reporting available
- No retaliation against good faith reporters""",
        category="conduct",
        tags=["code of conduct", "behavior", "diversity", "inclusion", "confidentiality", "ethics"],
        version="4.0",
        source="sample_conduct_policy_001",
    ),
]


def load_sample_policies() -> List[Policy]:
    """Return fresh copies of the sample policies."""
    return [replace(p, tags=list(p.tags)) for p in SAMPLE_POLICIES]
