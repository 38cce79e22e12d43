"""Main entry point for posting standard input to Slack."""

from post_stdin_to_slack.app import main

if __name__ == "__main__":
    main()
