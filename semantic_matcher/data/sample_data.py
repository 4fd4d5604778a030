"""
Built-in demonstration records used when no data file is configured.
"""

SAMPLE_DATA = [
    {
        "id": "js-react-001",
        "text": "Senior JavaScript developer with React experience and 5+ years in web development",
        "metadata": {
            "category": "development",
            "experience": "senior",
            "technologies": ["JavaScript", "React", "Web Development"],
        },
    },
    {
        "id": "python-ml-002",
        "text": "Python data scientist specializing in machine learning and statistical analysis",
        "metadata": {
            "category": "data-science",
            "experience": "specialist",
            "technologies": ["Python", "Machine Learning", "Statistics"],
        },
    },
    {
        "id": "ux-mobile-003",
        "text": "UX/UI designer with expertise in mobile app design and user research",
        "metadata": {
            "category": "design",
            "experience": "expert",
            "technologies": ["UX/UI", "Mobile Design", "User Research"],
        },
    },
    {
        "id": "devops-aws-004",
        "text": "DevOps engineer experienced in AWS cloud infrastructure and CI/CD pipelines",
        "metadata": {
            "category": "infrastructure",
            "experience": "experienced",
            "technologies": ["DevOps", "AWS", "CI/CD"],
        },
    },
    {
        "id": "fullstack-node-005",
        "text": "Full-stack developer proficient in Node.js backend and modern frontend frameworks",
        "metadata": {
            "category": "development",
            "experience": "proficient",
            "technologies": ["Node.js", "Full-stack", "Frontend Frameworks"],
        },
    },
]
