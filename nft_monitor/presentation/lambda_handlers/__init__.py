"""Lambda handlers.

Deployed handler paths:
- nft_monitor.presentation.lambda_handlers.monitor_handler.handler
- nft_monitor.presentation.lambda_handlers.transfer_events_handler.handler
- nft_monitor.presentation.lambda_handlers.authorizer_handler.handler
"""
