"""Core constants: cache key prefixes, table names and shared literal values.

Single source of truth for cache key structure (DRY). Key builders live in
campus_cms.infrastructure.cache.keys; every write path invalidates by the
prefixes declared here.
"""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Cache key prefixes (resource family)
CACHE_PREFIX_NEWS = "news"
CACHE_PREFIX_ACADEMIC_CALENDAR = "academic-calendar"
CACHE_PREFIX_ACCREDITATION = "accreditation"
CACHE_PREFIX_ORGANIZATION = "organization"
CACHE_PREFIX_ADMISSION = "admission-waves"
CACHE_PREFIX_SCHOLARSHIP = "scholarships"
CACHE_PREFIX_SLIDER = "slider"
CACHE_PREFIX_STUDENT_ORGS = "student-organizations"
CACHE_PREFIX_HR_DOCUMENTS = "hr-documents"
CACHE_PREFIX_COMPLAINTS = "complaints"
CACHE_PREFIX_VISITORS = "visitors"
CACHE_PREFIX_DASHBOARD = "dashboard"

# News query-variant families (one table, many parameterized caches)
NEWS_LIST_SEGMENT = "list"
NEWS_ADMIN_LIST_SEGMENT = "admin"
NEWS_LATEST_SEGMENT = "latest"
NEWS_ANNOUNCEMENTS_SEGMENT = "announcements"
NEWS_AGENDA_SEGMENT = "agenda"
NEWS_SLUG_SEGMENT = "slug"

# Audit target tables
TABLE_AUDIT_LOGS = "audit_logs"
TABLE_NEWS = "news"
TABLE_ACADEMIC_CALENDARS = "academic_calendars"
TABLE_ACCREDITATIONS = "accreditations"
TABLE_ORGANIZATION_MEMBERS = "organization_members"
TABLE_ADMISSION_WAVES = "admission_waves"
TABLE_SCHOLARSHIPS = "scholarships"
TABLE_SLIDES = "hero_slides"
TABLE_STUDENT_ORGS = "student_organizations"
TABLE_HR_DOCUMENTS = "hr_documents"
TABLE_COMPLAINTS = "complaints"
TABLE_VISITORS = "visitors"

# News categories excluded from the "latest news" strip
NEWS_NON_ARTICLE_CATEGORIES = ("announcement", "agenda")
NEWS_LATEST_LIMIT = 5
NEWS_BY_CATEGORY_LIMIT = 5
ACADEMIC_CALENDAR_LATEST_LIMIT = 4
SLIDER_ACTIVE_LIMIT = 4
SLIDER_ALL_LIMIT = 6

# Object storage folders
STORAGE_FOLDER_NEWS_IMAGES = "news/images"
STORAGE_FOLDER_NEWS_DOCUMENTS = "news/documents"
STORAGE_FOLDER_ACADEMIC_CALENDARS = "academic-calendars"
STORAGE_FOLDER_ACCREDITATIONS = "accreditations"
STORAGE_FOLDER_SCHOLARSHIPS = "scholarships"
STORAGE_FOLDER_COMPLAINTS = "complaints"
STORAGE_FOLDER_SLIDER = "slider"
STORAGE_FOLDER_STUDENT_ORGS = "student-organizations"
STORAGE_FOLDER_HR_DOCUMENTS = "hr-documents"

# JWT role claim accepted on admin endpoints (tokens without a role are admin tokens)
ADMIN_ROLE = "admin"
