"""Core domain package for matchdeck.

Core contains the matching queue, interaction recording and the notification
inbox without any storage, HTTP or UI-specific code, keeping the business
logic portable.
"""
