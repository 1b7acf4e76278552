"""Static term tables.

All entries are lowercase unless noted; matching against them is plain
substring containment on lowercased text.
"""

SKILL_TERMS = (
    # Programming languages
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "rust", "php",
    "ruby", "swift", "kotlin", "r programming", "matlab", "perl", "scala", "clojure",
    "haskell",
    # Frameworks and libraries
    "react", "vue", "angular", "next.js", "nuxt", "svelte", "ember", "node.js",
    "express", "nest.js", "fastapi", "django", "flask", "spring", "spring boot",
    "laravel", "rails", "asp.net", ".net", "dotnet",
    # Databases
    "sql", "nosql", "mongodb", "postgresql", "mysql", "redis", "cassandra",
    "dynamodb", "oracle", "sql server", "sqlite", "elasticsearch", "neo4j",
    # Cloud and devops
    "aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "k8s", "ci/cd",
    "jenkins", "terraform", "ansible", "chef", "puppet", "gitlab ci",
    "github actions", "serverless", "lambda", "ec2", "s3", "cloudformation",
    # Tools and platforms
    "git", "github", "gitlab", "bitbucket", "jira", "confluence", "slack", "trello",
    "figma", "sketch", "adobe xd", "invision",
    # Methodologies
    "agile", "scrum", "kanban", "waterfall", "devops", "lean", "six sigma",
    # AI/ML
    "machine learning", "ml", "deep learning", "neural networks", "tensorflow",
    "pytorch", "keras", "scikit-learn", "numpy", "pandas", "data science", "nlp",
    "natural language processing",
    # Web
    "html", "html5", "css", "css3", "sass", "scss", "less", "tailwind", "bootstrap",
    "rest api", "graphql", "soap", "microservices", "api", "restful",
    # Project management
    "project management", "pmp", "prince2", "agile project management",
    "scrum master", "product management", "product owner", "program management",
    # Soft skills
    "leadership", "communication", "teamwork", "collaboration", "problem solving",
    "analytical", "strategic thinking", "stakeholder management",
    # Other technology
    "linux", "unix", "windows", "macos", "ios", "android", "backend", "frontend",
    "full stack", "fullstack", "mobile development", "ios development",
    "android development", "web development", "software development",
    "application development",
    # Certifications and education
    "bachelor", "master", "phd", "degree", "bs", "ms", "mba", "certified",
    "certification",
    # Experience
    "years of experience", "years experience", "yrs experience",
)

PRIORITY_TERMS = (
    # Core
    "project management", "program management", "agile", "scrum", "kanban",
    "risk mitigation", "stakeholder communication", "strategic planning",
    "resource forecasting", "budget forecasting", "project planning",
    "project execution", "project delivery", "project coordination",
    "project oversight", "project governance", "pmp",
    "project management professional", "prince2", "pmi",
    "project management institute",
    # Workforce
    "workforce management", "staffing optimization", "global headcount planning",
    "headcount planning", "kpi monitoring", "kpi tracking",
    "key performance indicators", "performance metrics", "workforce planning",
    "resource management", "talent management", "capacity planning",
    # Compliance
    "compliance", "regulatory compliance", "compliance management", "audit",
    "governance", "risk management", "risk assessment",
    # Collaboration and leadership
    "cross-functional leadership", "cross-functional collaboration",
    "stakeholder management", "stakeholder engagement", "vendor management",
    "vendor relations", "process optimization", "process improvement",
    "executive reporting", "executive communication", "leadership",
    "team leadership", "collaboration", "team collaboration", "change management",
    "organizational change",
    # Tools
    "jira", "confluence", "microsoft office", "microsoft office suite",
    "microsoft excel", "microsoft word", "microsoft powerpoint",
    "microsoft project", "ms project", "ldap", "powershell", "sharepoint",
    "servicenow", "slack", "trello", "asana", "monday.com", "smartsheet",
    # Data analysis and forecasting
    "excel", "sql", "predictive modeling", "data visualization", "tableau",
    "power bi", "business intelligence", "reporting", "dashboards",
    "data analysis", "forecasting", "statistical analysis", "data interpretation",
)

STAFFING_COMPANIES = (
    "robert half", "roberthalf", "randstad", "adecco", "manpower",
    "kelly services", "kellyservices", "allegis", "aerotek", "teksystems",
    "insight global", "insightglobal", "kforce", "modis", "harvey nash",
    "harveynash", "hays", "michael page", "michaelpage", "page group", "hudson",
    "hudsonrpo", "volt", "voltworkforce", "staffing solutions", "staffingsolutions",
    "talent solutions", "recruiting", "recruiter", "recruitment", "staffing agency",
    "temporary", "temp", "contractor", "contract", "consulting firm", "wipro",
    "infosys", "tcs", "tata consultancy", "cognizant", "accenture", "deloitte",
    "pwc", "ey", "kpmg", "capgemini", "hcl", "tech mahindra", "lti", "mindtree",
    "mphasis", "genpact", "dxc", "atos", "collabera", "cybercoders", "cyber coders",
    "apex systems", "apexsystems", "actalent", "talentburst", "talent burst", "yoh",
    "judge group", "judgegroup", "planet technology", "planetech", "bridgeview",
    "apex", "mason frank", "masonfrank", "franklin covey", "talent",
    "talent acquisition", "recruiting solutions", "recruiting services",
    "staffing services", "it staffing", "tech staffing", "engineering staffing",
    "contract staffing", "temporary staffing", "contingent workforce",
)

BENEFIT_PHRASES = (
    "benefits", "benefit package", "benefits package", "health insurance",
    "medical insurance", "dental insurance", "vision insurance", "401k", "401(k)",
    "retirement plan", "pension", "paid time off", "pto", "vacation", "sick leave",
    "holiday pay", "life insurance", "disability insurance",
    "flexible spending account", "fsa", "hsa", "health savings account",
    "tuition reimbursement", "education assistance", "employee assistance program",
    "eap", "wellness program", "gym membership", "fitness", "stock options",
    "equity", "bonus", "incentive", "remote work", "work from home",
    "flexible schedule", "maternity leave", "paternity leave", "parental leave",
)

FULL_TIME_EXCLUSIONS = (
    "part-time", "part time", "contract", "temporary", "temp", "freelance", "consultant",
)

FULL_TIME_INDICATORS = ("full-time", "full time", "fulltime", "permanent", "ft")

EDUCATION_TERMS = ("bachelor", "master", "phd", "degree", "bs", "ms", "mba")

# Case-sensitive: "MS" in a resume is a degree, "ms" inside a word is not
RESUME_EDUCATION_MARKERS = (
    "Bachelor", "Master", "PhD", "Degree", "University", "College", "BS", "MS", "MBA",
)

# Display casing is kept; matching is case-insensitive
RESUME_SKILLS = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Rust",
    "React", "Vue", "Angular", "Node.js", "Express", "Django", "Flask",
    "SQL", "MongoDB", "PostgreSQL", "MySQL", "Redis",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "CI/CD",
    "Git", "GitHub", "GitLab", "Agile", "Scrum", "Machine Learning",
    "Data Science", "TensorFlow", "PyTorch", "REST API", "GraphQL",
    "HTML", "CSS", "SASS", "Tailwind", "Bootstrap",
    "Linux", "Unix", "Windows", "macOS",
    "Project Management", "Leadership", "Communication", "Teamwork",
)

COMMON_TITLES = (
    "Project Manager", "Product Manager", "Program Manager",
    "Software Engineer", "Senior Software Engineer", "Full Stack Developer",
    "Frontend Developer", "Backend Developer", "DevOps Engineer",
    "Data Scientist", "Data Analyst", "Business Analyst",
    "Product Designer", "UX Designer", "UI Designer",
    "Scrum Master", "Agile Coach", "Technical Lead",
    "Engineering Manager", "CTO", "VP Engineering",
    "Sales Manager", "Marketing Manager", "HR Manager",
    "Operations Manager", "Finance Manager",
)

# Resume title category -> terms that signal the same role in a posting
ROLE_CATEGORIES = {
    "project manager": ("project manager", "program manager", "pmp", "agile project", "scrum master"),
    "product manager": ("product manager", "product owner", "product lead"),
    "software engineer": ("software engineer", "developer", "programmer", "software developer"),
    "data scientist": ("data scientist", "data analyst", "machine learning engineer"),
    "designer": ("designer", "ux designer", "ui designer", "user experience"),
    "business analyst": ("business analyst", "analyst", "business intelligence"),
    "sales": ("sales", "account executive", "business development"),
    "marketing": ("marketing", "digital marketing", "marketing manager"),
    "devops": ("devops", "site reliability", "sre", "infrastructure engineer"),
}

# Resume domain tag -> indicator terms in resume text
DOMAIN_TAGS = {
    "project management": ("project management", "project manager", "pmp", "agile", "scrum", "kanban", "waterfall"),
    "product management": ("product management", "product manager", "product owner", "roadmap", "backlog"),
    "software engineering": ("software engineer", "developer", "programming", "coding", "software development"),
    "data science": ("data science", "data scientist", "machine learning", "ml", "ai", "data analysis"),
    "devops": ("devops", "ci/cd", "deployment", "infrastructure", "kubernetes", "docker"),
    "design": ("ux design", "ui design", "user experience", "user interface", "designer"),
    "business": ("business analyst", "business development", "strategy", "consulting"),
    "sales": ("sales", "account executive", "business development", "revenue"),
    "marketing": ("marketing", "digital marketing", "content marketing", "seo", "sem"),
}

# Target role -> title phrases that earn the scoring bonus
TARGET_ROLE_TITLES = {
    "project manager": ("project manager", "program manager"),
    "product manager": ("product manager", "product owner"),
    "software engineer": ("software engineer", "software developer"),
    "data scientist": ("data scientist", "machine learning engineer"),
    "business analyst": ("business analyst",),
    "devops": ("devops engineer", "site reliability engineer"),
}

# Target role -> title phrases accepted by the optional role filter
ROLE_FAMILY_TITLES = {
    "project manager": (
        "project manager", "program manager", "project management",
        "program management", "project lead", "project coordinator",
        "project director", "project specialist", "project analyst",
        "project administrator", "senior project manager",
        "technical project manager", "it project manager", "agile project manager",
        "scrum master", "project management office", "pmo",
    ),
    "product manager": ("product manager", "product owner", "product lead", "product director"),
    "software engineer": ("software engineer", "software developer", "developer", "programmer"),
    "data scientist": ("data scientist", "machine learning engineer", "data analyst"),
    "business analyst": ("business analyst", "business systems analyst"),
    "devops": ("devops", "site reliability", "sre", "platform engineer", "infrastructure engineer"),
}

# Target role -> certification names; the first one is the short form used as a keyword
CERTIFICATIONS = {
    "project manager": ("pmp", "project management professional"),
}
