from .dashboard import GroupCount, TrendBucket, MemberPerformance, ActivityItem, DistributionItem, PerformanceMetrics, AnalyticsReport, CountReport, MemberTrendReport
