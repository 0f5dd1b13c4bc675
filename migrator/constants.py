"""Fixed file names and formats shared across the job."""

VALUE_MAPPING_CSV_FILENAME = "ValueMapping.csv"
CSV_ISSUES_ERRORS_FILENAME = "CSVIssuesReport.csv"

USER_CSV_FILENAME = "User.csv"
GROUP_CSV_FILENAME = "Group.csv"
USER_AND_GROUP_FILENAME = "UserAndGroup"

# Backup copies of the original CSVs, relative to the job base path
CSV_SOURCE_SUB_DIRECTORY = "source"

# Objects whose rows live in the merged User/Group file
USER_AND_GROUP_OBJECTS = ("User", "Group")

ID_FIELD = "Id"
SYNTHETIC_ID_PREFIX = "ID"
SYNTHETIC_ID_DIGITS = 16

ISSUE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
