NO_FEEDBACK_MARKDOWN = "# No Feedback Available\n\nNo feedback entries found for the selected date range."

REPORT_PROMPT_TEMPLATE = """You are an expert product manager. Generate a comprehensive weekly customer feedback report based on the following {count} feedback entries:

{feedback_json}

Create a professional weekly report with these sections:

# Weekly Customer Feedback Report
**Week of {window_label}**

## 📌 Overview
Provide a 2-3 sentence summary of overall sentiment trends and key themes.

## 🚨 Top Urgent Issues
List the top 3-5 most urgent issues (High urgency + High impact). Include:
- Issue title
- Customer quote (actual feedback text)
- Impact assessment

## 💡 Feature Requests
Summarize the most requested features (sorted by frequency/impact).

## 🐛 Bug Reports
List critical bugs that need immediate attention.

## 📊 Sentiment Analysis
Provide breakdown of positive, neutral, and negative feedback with percentages.

## 🛠 Recommended Actions
Create a prioritized action list for the product team. Be specific and actionable.

Format the entire output in clean, professional Markdown that can be copied to Notion, Slack, or email."""
