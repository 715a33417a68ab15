from vpcstack.program import declare_vpc


declare_vpc()
