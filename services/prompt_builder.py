"""
Prompt construction for lead generation.

build_prompt() is a pure function of the profile: the same profile always
produces the same text. Every populated profile field is embedded verbatim,
and exactly one block of email-tone guidance is chosen by email_approach.
"""
from models.internal import CompanyProfile, EmailApproach

# Shown to the model as the expected output; not enforced by the API.
LEAD_SCHEMA_DESCRIPTION = """
[
  {
    "report": {
      "companyName": "The lead's company name.",
      "businessSector": "The company's line of business.",
      "keyContact": "A key contact role or person, e.g. 'Head of Marketing' or 'CEO'.",
      "contactNumber": "Main phone number, taken DIRECTLY from the business listing. Leave empty if there is none.",
      "companyWebsite": "Official website, EXACTLY as it appears on the business listing. Leave empty if the listing has no website.",
      "digitalStatus": "Short assessment of the lead's digital presence, e.g. 'Basic chatbot on website' or 'High Instagram engagement'.",
      "emailContact": "Public contact email, ONLY if it is visible on the business listing. Otherwise leave empty. DO NOT INVENT IT."
    },
    "email": "The full text of the outreach email, hyper-personalized for this lead."
  }
]
"""

_APPROACH_AGGRESSIVE = """
**Email tone:** Aggressive and direct.
**Guideline:** Create a sense of urgency or FOMO (fear of missing out). Open with a strong statement that points at a pain or a loss, e.g. "You are losing sales by not doing X..." or "Your competitor is already doing Y, are you?". The goal is to jolt the reader and get a fast reply.
"""

_APPROACH_FRIENDLY = """
**Email tone:** Friendly and casual.
**Guideline:** Build rapport. Use personal, less corporate language. You may mention something you genuinely noticed in their "Digital status". The goal is to start a conversation, not to hard-sell, e.g. "Hi [Name], I saw your post about Z and found it really interesting...".
"""

_APPROACH_PROFESSIONAL = """
**Email tone:** Professional and value-focused.
**Guideline:** Be formal but concise. Get straight to the value your "Core solution" adds to the lead's business. Use data or a clear value proposition. The goal is to establish credibility and book a meeting based on business benefits.
"""

_APPROACH_CUSTOM = """
**Email tone:** Defined by the user.
**Guideline:** Follow EXACTLY the instructions below when writing the email:
"{custom_prompt}"
"""


def email_approach_instructions(profile: CompanyProfile) -> str:
    approach = profile.email_approach
    if approach == EmailApproach.AGGRESSIVE:
        return _APPROACH_AGGRESSIVE
    if approach == EmailApproach.FRIENDLY:
        return _APPROACH_FRIENDLY
    if approach == EmailApproach.PROFESSIONAL:
        return _APPROACH_PROFESSIONAL
    if approach == EmailApproach.CUSTOM:
        # User text goes to the model as-is; it is a trusted template.
        return _APPROACH_CUSTOM.format(custom_prompt=profile.custom_email_prompt or "")
    return ""


def _social_profiles(profile: CompanyProfile) -> str:
    lines = ""
    if profile.linkedin_profile:
        lines += f"\n* **LinkedIn profile:** {profile.linkedin_profile}"
    if profile.twitter_profile:
        lines += f"\n* **Twitter (X) profile:** {profile.twitter_profile}"
    return lines


def build_prompt(profile: CompanyProfile, lead_count: int = 10) -> str:
    audience = ""
    if profile.target_audience:
        audience = (
            "* **Specific audience (additional focus):** Find companies that match "
            f'this description: "{profile.target_audience}".'
        )

    return f"""
You are an AI agent specialized in B2B prospecting, focused on ABSOLUTE data accuracy.

**UNBREAKABLE RULES:**
1.  **SINGLE DATA SOURCE:** Your ONLY source for contact information (website, phone, email) MUST be the business directory search results.
2.  **DO NOT INVENT ANYTHING:** It is strictly FORBIDDEN to invent, guess or create any information. If a value (e.g. website or email) is not CLEARLY listed on the company's business listing, the matching JSON field MUST be an empty string "".
3.  **ACCURACY IS EVERYTHING:** An empty field is INFINITELY better than false data. You are judged on the truthfulness of the data, not on how many fields you fill.

**Hiring Company Profile:**
* **Sector:** {profile.sector}
* **Company size:** {profile.size}
* **Core solution:** {profile.core_solution}
* **Main interaction channels:** {profile.channels}{_social_profiles(profile)}

**Prospecting Criteria (ICP - Ideal Customer Profile):**
* **Ideal customer profile (description):** {profile.icp}
* **Target country:** {profile.country}. **CRITICAL REQUIREMENT:** Every lead MUST be located in this country. Phone numbers must use this country's international dialing code.
{audience}

**Your Task:**
1.  **Use the business directory search:** Find {lead_count} companies that match ALL prospecting criteria PERFECTLY, using the search tool as your primary and ONLY source of contact data.
2.  **Write a report (WITH REAL DATA):** For each company found, fill in the report following the UNBREAKABLE RULES. Website, phone and email accuracy is crucial. If a value is not on the business listing, leave the field as an empty string "".
3.  **Write a hyper-personalized email:** For each lead, write an outreach email following the guidelines below. The email must:
    * Be short, direct and relevant.
    * Connect the hiring company's "Core solution" to a specific need or pain of the lead.
    * Mention the lead's "Digital status" intelligently to show you did your research.
    * End with a clear call to action suggesting a short, results-focused conversation.

**Outreach Email Guidelines:**
{email_approach_instructions(profile)}

**Response Format:**
Respond EXACTLY with a JSON array, with no additional text before or after the array. Follow this structure:
{LEAD_SCHEMA_DESCRIPTION}
"""
