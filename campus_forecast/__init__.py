"""
Campus Forecast

Forecasting service for college revenue, expenses, profit and headcount.

Layer Structure:
- Domain: Entities, repository contracts and the forecasting services
- Application: Prediction orchestrator and DTOs
- Infrastructure: MongoDB client and repository implementations
- Presentation: FastAPI routers
- Shared: Constants and logging
- Main: Settings, dependency container and application entry point
"""
