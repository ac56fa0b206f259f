"""
Reply texts.

Markdown-flavoured strings as rendered by the chat client. Placeholders
use str.format fields.
"""

CANCEL_KEYWORD = "cancel"
SKIP_KEYWORD = "skip"

UNKNOWN_COMMAND = "I didn't understand that command. Type **/help** to see available commands."
NOTHING_TO_CANCEL = "There's nothing to cancel. Type **/help** to see available commands."
SOMETHING_WENT_WRONG = "Something went wrong. Please try again with **{command}**"
OPERATION_FAILED = "❌ Error: {message}"
CANNOT_SKIP = "❌ This question can't be skipped."
FIELD_INVALID = "❌ {message}"
UNIDENTIFIED_SENDER = (
    "❌ Error: Could not identify user. Please configure the bot with user context.\n\n"
    "Expected JSON format:\n"
    '```\n{\n  "user": {"id": "...", "name": "...", "email": "..."},\n  "message": "..."\n}\n```'
)
WEBHOOK_FAILED = "❌ An error occurred while processing your message.\n\nPlease try again or contact support."

# Permission and precondition denials
ALREADY_REGISTERED = "❌ You're already registered in organization: **{organization}**\n\nType **/help** to see available commands."
REGISTER_FIRST = "❌ Please register your organization first with **/register-org**"
NOT_REGISTERED = "❌ You're not registered. Type **/register-org** to get started."
ONLY_ADMINS_CREATE_TEAMS = "❌ Only organization admins can create teams."
TEAM_REQUIRED_TO_ADD = "❌ You must be part of a team to add users. Create a team with **/create-team** first."
ONLY_LEADS_ADD_USERS = "❌ Only team leads and organization admins can add users."
TEAM_REQUIRED_FOR_STANDUP = "❌ You must join a team before submitting standups."
TEAM_REQUIRED_TO_VIEW = "❌ You're not part of a team yet."
CANNOT_VIEW_TEAM = "❌ You don't have access to this team."
ONLY_ADMINS_VIEW_ORG = "❌ Only organization admins can view the organization dashboard."
STANDUP_ALREADY_SUBMITTED = "✅ You've already submitted standup for today!\n\nType **/status** to view your profile."
CONVERSATION_IN_PROGRESS = "❌ You're already in the middle of a conversation. Type **cancel** to abort it first."

# Flow openers
REGISTER_ORG_INTRO = "🏢 **Organization Registration**\n\n"
CREATE_TEAM_INTRO = "👥 **Team Creation**\n\n"
ADD_USER_INTRO = "👤 **Add User to Team**\n\n"
STANDUP_INTRO = "📝 **Daily Standup**\n"
UPDATE_GITHUB_INTRO = "🐙 **Update GitHub Integration**\n\n"
UPDATE_JIRA_INTRO = "🎫 **Update Jira Integration**\n\n"
STANDUP_COMMITS_HEADER = "\n**📝 Your GitHub Commits (Last 24h):**\n"
STANDUP_ISSUES_HEADER = "\n**🎫 Your Jira Issues:**\n"

# Cancellations
ORG_REGISTRATION_CANCELLED = "❌ Organization registration cancelled."
TEAM_CREATION_CANCELLED = "❌ Team creation cancelled."
USER_ADDITION_CANCELLED = "❌ User addition cancelled."
STANDUP_CANCELLED = "❌ Standup cancelled."
GITHUB_UPDATE_CANCELLED = "❌ GitHub update cancelled."
JIRA_UPDATE_CANCELLED = "❌ Jira update cancelled."

# Completions
ORG_CREATED = (
    "✅ **Organization Created!**\n\n"
    "Organization: **{name}**\n"
    "Domain: **{domain}**\n"
    "Your Role: **ORG_ADMIN** 👑\n\n"
    "You can now:\n"
    "• **/create-team** - Create teams\n"
    "• **/help** - See all commands"
)
TEAM_CREATED = (
    "✅ **Team Created!**\n\n"
    "Team: **{name}**\n"
    "{github_line}"
    "{jira_line}"
    "Your Role: **{role}** 🎖️\n\n"
    "Next steps:\n"
    "• **/add-user** - Add team members\n"
    "• **standup** - Submit your first standup\n"
    "• **/help** - See all commands"
)
USER_ADDED = (
    "✅ **User Added Successfully!**\n\n"
    "Name: **{name}**\n"
    "Email: **{email}**\n"
    "Team: **{team}**\n"
    "Role: **MEMBER**\n"
    "{github_line}"
    "{jira_line}"
    "\nThey can now submit standups with the **standup** command once they message me!"
)
STANDUP_SUBMITTED = "✅ **Standup Submitted!**\n\n**{summary_title}:**\n{summary}\n\nGreat work! 🎉"
GITHUB_UPDATED = "✅ **GitHub Updated!**\n\nUsername: **{username}** ✅\n\nYour commits will be attached to your standups."
JIRA_UPDATED = "✅ **Jira Updated!**\n\nEmail: **{email}** ✅\n\nYour active issues will be attached to your standups."
