"""Curated local candidate lists used for company and role suggestions.

Both lists are ordered roughly by popularity so that substring matches keep
the most commonly chosen entries near the top.
"""

POPULAR_COMPANIES: tuple[str, ...] = (
    "Google",
    "Microsoft",
    "Apple",
    "Amazon",
    "Meta",
    "Netflix",
    "Nvidia",
    "Salesforce",
    "Adobe",
    "Oracle",
    "IBM",
    "Intel",
    "Cisco",
    "Tesla",
    "SpaceX",
    "Uber",
    "Lyft",
    "Airbnb",
    "Stripe",
    "Shopify",
    "Spotify",
    "Snowflake",
    "Databricks",
    "Datadog",
    "Atlassian",
    "Slack",
    "Zoom",
    "Dropbox",
    "Pinterest",
    "Reddit",
    "LinkedIn",
    "Twitter",
    "Square",
    "PayPal",
    "Coinbase",
    "Robinhood",
    "OpenAI",
    "Anthropic",
    "Palantir",
    "ServiceNow",
    "Workday",
    "VMware",
    "Qualcomm",
    "AMD",
    "Samsung",
    "Sony",
    "Goldman Sachs",
    "JPMorgan Chase",
    "Morgan Stanley",
    "Bloomberg",
    "McKinsey & Company",
    "Boston Consulting Group",
    "Deloitte",
    "Accenture",
    "Capital One",
    "Intuit",
    "HubSpot",
    "Twilio",
    "GitHub",
    "GitLab",
    "Cloudflare",
    "MongoDB",
    "Elastic",
    "Figma",
    "Notion",
    "Canva",
    "DoorDash",
    "Instacart",
    "Walmart",
    "Target",
)

JOB_ROLES: tuple[str, ...] = (
    "Software Engineer",
    "Senior Software Engineer",
    "Staff Software Engineer",
    "Principal Software Engineer",
    "Software Development Engineer",
    "Frontend Engineer",
    "Frontend Developer",
    "Backend Engineer",
    "Backend Developer",
    "Full Stack Engineer",
    "Full Stack Developer",
    "Mobile Engineer",
    "iOS Developer",
    "Android Developer",
    "DevOps Engineer",
    "Site Reliability Engineer",
    "Platform Engineer",
    "Cloud Engineer",
    "Security Engineer",
    "Data Engineer",
    "Data Scientist",
    "Data Analyst",
    "Machine Learning Engineer",
    "ML Engineer",
    "AI Engineer",
    "Research Scientist",
    "QA Engineer",
    "QA Analyst",
    "Quality Assurance Engineer",
    "Test Automation Engineer",
    "Engineering Manager",
    "Senior Engineering Manager",
    "Director of Engineering",
    "VP of Engineering",
    "Chief Technology Officer",
    "Technical Program Manager",
    "Product Manager",
    "Senior Product Manager",
    "Project Manager",
    "Program Manager",
    "Product Designer",
    "UX Designer",
    "UI Designer",
    "UX Researcher",
    "Graphic Designer",
    "Solutions Architect",
    "Systems Administrator",
    "Database Administrator",
    "Network Engineer",
    "Embedded Software Engineer",
    "Mechanical Engineer",
    "Electrical Engineer",
    "Business Analyst",
    "Business Development Manager",
    "Marketing Manager",
    "Product Marketing Manager",
    "Sales Engineer",
    "Account Executive",
    "Customer Success Manager",
    "Operations Manager",
    "Human Resources Manager",
    "Recruiter",
    "Technical Writer",
    "Financial Analyst",
    "Chief Executive Officer",
    "Chief Financial Officer",
    "Chief Operating Officer",
)
